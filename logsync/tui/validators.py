from textual.validation import Validator, ValidationResult

from logsync.timestamp_format import TimestampFormat


class TimestampFormatValidator(Validator):
    """Accepts strptime patterns that TimestampFormat can parse log lines with."""
    def __init__(self):
        super().__init__("Invalid timestamp format")

    def validate(self, value: str) -> ValidationResult:
        try:
            TimestampFormat(value)
        except ValueError as ve:
            return self.failure(str(ve).capitalize())
        else:
            return self.success()
