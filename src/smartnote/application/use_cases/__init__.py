"""Use cases."""

from smartnote.application.use_cases.notes_transfer import (
    ImportedNote,
    NotesTransferUseCase,
    export_filename,
    parse_import_payload,
)

__all__ = [
    "ImportedNote",
    "NotesTransferUseCase",
    "export_filename",
    "parse_import_payload",
]
