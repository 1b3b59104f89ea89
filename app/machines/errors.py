# app/machines/errors.py
"""
Error kinds for the upload and query pipelines.

Each carries the HTTP status the blueprint answers with and a message that is
safe to show to the user. ``ExplanationFailure`` never reaches the client: the
query flow swaps in a localized fallback sentence instead.
"""


class MachineTrackerError(Exception):
    status_code = 500
    message = "An unexpected error occurred."
    expose_details = True

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

    def to_dict(self):
        out = {"ok": False, "error": self.message}
        if self.details and self.expose_details:
            out["details"] = self.details
        return out


class NoFileProvided(MachineTrackerError):
    status_code = 400
    message = "No file uploaded"


class MalformedInputError(MachineTrackerError):
    status_code = 400
    message = "Excel file is empty or missing data rows."


class InsertFailure(MachineTrackerError):
    status_code = 500
    message = "Failed to store the uploaded rows."


class GenerationFailure(MachineTrackerError):
    status_code = 502
    message = "An error occurred while processing your request with the AI."
    expose_details = False  # provider errors stay in the log


class UnsafeQueryError(MachineTrackerError):
    status_code = 400
    message = "AI generated potentially unsafe SQL. Only single SELECT statements are allowed."


class DatabaseQueryError(MachineTrackerError):
    status_code = 500
    message = "There was an error with the generated query. Please try rephrasing your question."


class ExplanationFailure(MachineTrackerError):
    message = "Could not generate an explanation."
