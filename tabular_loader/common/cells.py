"""워크북 셀 값을 화면 표시용 문자열로 변환합니다."""

from __future__ import annotations

import datetime as dt

import numpy as np
import pandas as pd


def cell_to_text(value: object) -> str:
    """
    워크북 셀 하나를 문자열로 변환합니다.

    규칙:
    - 빈 셀(None, NaN, NaT)은 ""
    - 정수 값인 float는 끝의 ".0"을 제거
    - 불리언은 스프레드시트 표기대로 TRUE / FALSE
    - 날짜와 시간은 ISO 형식

    Examples:
        >>> cell_to_text(3.0)
        '3'
        >>> cell_to_text(2.5)
        '2.5'
        >>> cell_to_text(None)
        ''
    """
    if value is None:
        return ""

    if isinstance(value, (bool, np.bool_)):
        return "TRUE" if value else "FALSE"

    if isinstance(value, (float, np.floating)):
        if np.isnan(value):
            return ""
        if np.isfinite(value) and float(value).is_integer():
            return str(int(value))
        return str(float(value))

    if isinstance(value, (int, np.integer)):
        return str(int(value))

    if value is pd.NaT:
        return ""

    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()

    if isinstance(value, dt.datetime):
        if value.time() == dt.time(0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")

    if isinstance(value, (dt.date, dt.time)):
        return value.isoformat()

    return str(value)
