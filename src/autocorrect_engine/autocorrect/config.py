"""Engine settings, overridable through ``AUTOCORRECT_ENGINE_*`` variables."""

from __future__ import annotations

from dataclasses import dataclass

from autocorrect_engine.document import UnderlineFormat, UnderlineStyle
from autocorrect_engine.runtime import telemetry


@dataclass(frozen=True, slots=True)
class AutoCorrectConfig:
    underline_color: str = "red"
    underline_style: UnderlineStyle = UnderlineStyle.SINGLE
    # Fold each pass into the undo entry of the edit that triggered it.
    merge_undo: bool = True

    @property
    def flag_format(self) -> UnderlineFormat:
        return UnderlineFormat(color=self.underline_color, style=self.underline_style)

    @classmethod
    def from_env(cls) -> "AutoCorrectConfig":
        raw_style = (telemetry.env("UNDERLINE_STYLE") or "single").lower()
        try:
            style = UnderlineStyle(raw_style)
        except ValueError as exc:
            raise ValueError(f"Unknown underline style '{raw_style}'.") from exc
        return cls(
            underline_color=telemetry.env("UNDERLINE_COLOR") or "red",
            underline_style=style,
            merge_undo=telemetry.env_flag("MERGE_UNDO", True),
        )


__all__ = ["AutoCorrectConfig"]
