"""smartnote: personal note organizer with activity statistics."""
