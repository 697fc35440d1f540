from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OnEOFAction(Enum):
    STORE_ZERO = 'zero'
    STORE_EOF = 'eof'
    DO_NOTHING = 'nothing'


# C's EOF (-1) as stored in a signed 8-bit cell
EOF_VALUE = -1


@dataclass(frozen=True)
class Configuration:
    debug_is_enabled: bool = False
    on_eof_action: OnEOFAction = OnEOFAction.STORE_ZERO

    @classmethod
    def from_names(cls, *, debug: bool = False, on_eof: str = 'zero') -> "Configuration":
        try:
            action = OnEOFAction(on_eof)
        except ValueError:
            choices = ', '.join(a.value for a in OnEOFAction)
            raise ValueError(f"Unknown on-EOF action: {on_eof!r} (expected one of: {choices})") from None
        return cls(debug_is_enabled=bool(debug), on_eof_action=action)
