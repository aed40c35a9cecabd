"""Typed failures raised by the parser and extractor."""

ERRORS = {
    "E_BAD_MAGIC": "Missing BIGF magic header, not a big file",
    "E_TRUNCATED_HEADER": "Archive shorter than the fixed header",
    "E_TRUNCATED_TABLE": "Archive shorter than its entry table",
    "E_PAYLOAD_RANGE": "Entry payload lies outside the archive",
    "E_KEY_FILE": "Cannot load cipher key file",
}


class BigfError(ValueError):
    code = ""

    def __init__(self, detail: str | None = None):
        self.detail = detail
        msg = ERRORS[self.code]
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class InvalidMagic(BigfError):
    code = "E_BAD_MAGIC"


class TruncatedHeader(BigfError):
    code = "E_TRUNCATED_HEADER"


class TruncatedTable(BigfError):
    code = "E_TRUNCATED_TABLE"


class PayloadOutOfRange(BigfError):
    code = "E_PAYLOAD_RANGE"


class KeyFileError(BigfError):
    """Configuration error: fatal for the whole run, never per archive."""

    code = "E_KEY_FILE"
