"""
CSV 백엔드 테스트

행 구간, 헤더 복원, 필드 수가 다른 행, 에러 보고를 테스트합니다.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from conftest import MIXED_HEADER, data_row, write_lines
from tabular_loader.data_sources.delimited import DelimitedTextBackend
from tabular_loader.domain.exceptions import DecodeError, EmptySourceError, SourceOpenError
from tabular_loader.domain.models import LoadRequest, MixedStructure, SimpleStructure


@pytest.fixture
def backend() -> DelimitedTextBackend:
    return DelimitedTextBackend()


# ============================================================
# 혼합 구조 파일
# ============================================================


def test_mixed_file_paginates_past_preamble(backend, mixed_csv):
    """메타데이터 3줄 + 헤더 + 250행 - 100 / 100 / 50으로 제공"""
    first = backend.load(LoadRequest(mixed_csv, start_row=0, row_count=100))
    assert first.headers == tuple(MIXED_HEADER)
    assert len(first.rows) == 100
    assert first.rows[0] == tuple(data_row(0))
    assert first.end_of_data is False

    second = backend.load(LoadRequest(mixed_csv, start_row=100, row_count=100))
    assert second.headers == ()
    assert len(second.rows) == 100
    assert second.rows[0] == tuple(data_row(100))
    assert second.end_of_data is False

    third = backend.load(LoadRequest(mixed_csv, start_row=200, row_count=100))
    assert len(third.rows) == 50
    assert third.rows[-1] == tuple(data_row(249))
    assert third.end_of_data is True


def test_preamble_never_surfaces_as_data(backend, mixed_csv):
    result = backend.load(LoadRequest(mixed_csv, start_row=0, row_count=300))

    flattened = {cell for row in result.rows for cell in row}
    assert "alice" not in flattened
    assert "INDEX" not in flattened
    assert len(result.rows) == 250


def test_detect_reports_header_offset(backend, mixed_csv):
    assert backend.detect(mixed_csv) == MixedStructure(header_offset=3)


# ============================================================
# 단순 구조 파일
# ============================================================


def test_simple_file_uses_first_line_as_header(backend, simple_csv):
    result = backend.load(LoadRequest(simple_csv, start_row=0, row_count=5))

    assert backend.detect(simple_csv) == SimpleStructure()
    assert result.headers == ("name", "age", "city")
    assert result.rows[0] == ("person0", "20", "city0")
    assert result.sheet_names == ("CSV",)


def test_same_window_twice_is_identical(backend, simple_csv):
    request = LoadRequest(simple_csv, start_row=0, row_count=4)

    assert backend.load(request).rows == backend.load(request).rows


def test_window_ending_on_last_row_reports_end_on_next_call(backend, simple_csv):
    exact = backend.load(LoadRequest(simple_csv, start_row=0, row_count=10))
    after = backend.load(LoadRequest(simple_csv, start_row=10, row_count=10))

    assert len(exact.rows) == 10
    assert exact.end_of_data is False
    assert after.rows == ()
    assert after.end_of_data is True


def test_ragged_rows_keep_present_fields(backend, tmp_path):
    lines = ["a,b,c", "1,2,3", "4,5,6", "7,8,9", "10,11,12", "13,14,15", "x,y", "16,17,18"]
    path = write_lines(tmp_path / "ragged.csv", lines)

    result = backend.load(LoadRequest(path, start_row=0, row_count=10))

    assert result.rows[5] == ("x", "y")
    assert result.rows[6] == ("16", "17", "18")
    assert result.end_of_data is True


def test_blank_lines_are_skipped(backend, tmp_path):
    path = write_lines(tmp_path / "gaps.csv", ["a,b", "", "1,2", "", "3,4"])

    result = backend.load(LoadRequest(path, start_row=0, row_count=10))

    assert result.headers == ("a", "b")
    assert result.rows == (("1", "2"), ("3", "4"))


def test_quoted_fields_and_bom(backend, tmp_path):
    path = tmp_path / "quoted.csv"
    path.write_bytes('\ufeffname,note\n"Lee, Ann","said ""hi"""\n'.encode("utf-8"))

    result = backend.load(LoadRequest(path, start_row=0, row_count=10))

    assert result.headers == ("name", "note")
    assert result.rows == (("Lee, Ann", 'said "hi"'),)


def test_quoted_field_spanning_lines(backend, tmp_path):
    """따옴표 안의 줄바꿈은 필드 값으로 유지"""
    path = tmp_path / "multiline.csv"
    path.write_bytes(b'key,comment\r\n1,"first line\r\nsecond line"\r\n2,plain\r\n')

    result = backend.load(LoadRequest(path, start_row=0, row_count=10))

    assert result.headers == ("key", "comment")
    assert result.rows == (("1", "first line\r\nsecond line"), ("2", "plain"))


def test_carriage_return_line_endings(backend, tmp_path):
    path = tmp_path / "classic_mac.csv"
    path.write_bytes(b"a,b\r1,2\r3,4\r")

    result = backend.load(LoadRequest(path, start_row=0, row_count=10))

    assert result.headers == ("a", "b")
    assert result.rows == (("1", "2"), ("3", "4"))


# ============================================================
# 에러
# ============================================================


def test_empty_file_raises_empty_source(backend, tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(EmptySourceError):
        backend.load(LoadRequest(path, start_row=0, row_count=10))


def test_invalid_utf8_raises_decode_error(backend, tmp_path):
    path = tmp_path / "latin.csv"
    path.write_bytes(b"a,b\n1,\xff\xfe\n")

    with pytest.raises(DecodeError) as excinfo:
        backend.load(LoadRequest(path, start_row=0, row_count=10))

    assert excinfo.value.line == 2


def test_bad_byte_only_fails_the_window_that_reaches_it(backend, bad_tail_csv):
    """152번째 줄의 잘못된 바이트 - 앞 구간은 정상 제공, 해당 구간만 실패"""
    first = backend.load(LoadRequest(bad_tail_csv, start_row=0, row_count=100))

    assert first.headers == ("a", "b")
    assert len(first.rows) == 100
    assert first.rows[-1] == ("99", "198")
    assert first.end_of_data is False

    with pytest.raises(DecodeError) as excinfo:
        backend.load(LoadRequest(bad_tail_csv, start_row=100, row_count=100))

    assert excinfo.value.line == 152
    assert "(line 152)" in str(excinfo.value)


def test_missing_file_raises_source_open_error(backend, tmp_path: Path):
    with pytest.raises(SourceOpenError) as excinfo:
        backend.load(LoadRequest(tmp_path / "missing.csv", start_row=0, row_count=10))

    assert "missing.csv" in str(excinfo.value)
