"""엔진 전역 설정."""

from .config import CONFIG, DetectionConfig, EngineConfig, LoaderConfig, PaginationConfig

__all__ = ["CONFIG", "DetectionConfig", "EngineConfig", "LoaderConfig", "PaginationConfig"]
