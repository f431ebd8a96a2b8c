"""Pydantic schemas for CSV bulk import results."""
from typing import Literal

from pydantic import BaseModel

from app.ingestion.errors import ErrorKind

ImportMode = Literal["nodes", "relationships"]
RowStatus = Literal["realized", "skipped", "failed"]


class RowOutcome(BaseModel):
    row: int
    status: RowStatus
    reason: ErrorKind | None = None
    message: str = ""
    element_id: str | None = None

    @property
    def realized(self) -> bool:
        return self.status == "realized"


class ImportOutcome(BaseModel):
    file_name: str
    mode: ImportMode
    rows_read: int = 0
    rows_realized: int = 0
    rows_skipped: int = 0
    rows_failed: int = 0
    issues: list[RowOutcome] = []

    def record(self, outcome: RowOutcome) -> None:
        self.rows_read += 1
        if outcome.status == "realized":
            self.rows_realized += 1
            return
        if outcome.status == "skipped":
            self.rows_skipped += 1
        else:
            self.rows_failed += 1
        self.issues.append(outcome)

    @property
    def message(self) -> str:
        return f"Imported {self.rows_realized} of {self.rows_read} rows from {self.file_name}"


class UploadResponse(BaseModel):
    message: str
    file_name: str
    mode: ImportMode
    rows_read: int
    rows_realized: int
    rows_skipped: int
    rows_failed: int

    @classmethod
    def from_outcome(cls, outcome: ImportOutcome) -> "UploadResponse":
        return cls(
            message=outcome.message,
            file_name=outcome.file_name,
            mode=outcome.mode,
            rows_read=outcome.rows_read,
            rows_realized=outcome.rows_realized,
            rows_skipped=outcome.rows_skipped,
            rows_failed=outcome.rows_failed,
        )


class ErrorResponse(BaseModel):
    error: str
