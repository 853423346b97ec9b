"""flagstate の例外型定義"""

from __future__ import annotations


class FeatureFlagError(Exception):
    """フラグ操作のエラー基底クラス。"""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class FeatureFlagErrorCodes:
    """エラーコード定数。"""

    FLAG_NOT_FOUND: str = "FLAG_NOT_FOUND"
    FLAG_ALREADY_EXISTS: str = "FLAG_ALREADY_EXISTS"
    OVERRIDE_NOT_FOUND: str = "OVERRIDE_NOT_FOUND"
    INVALID_FLAG_KEY: str = "INVALID_FLAG_KEY"


class ConfigError(Exception):
    """設定読み込みのエラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ConfigErrorCodes:
    """ConfigError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
