"""Email normalization shared by identity resolution and registrations."""


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed and lower-cased."""

    return (email or "").strip().lower()


__all__ = ["normalize_email"]
