"""Operation result models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AddVideoResult:
    """Outcome of adding a video to the local store."""
    success: bool
    error: str | None = None

    def to_dict(self) -> dict[str, bool | str]:
        """Render as ``{"success": ...}`` with ``"error"`` only on failure."""
        data: dict[str, bool | str] = {"success": self.success}
        if not self.success and self.error is not None:
            data["error"] = self.error
        return data
