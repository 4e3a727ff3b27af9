from typing import Optional

import attrs


@attrs.define(frozen=True)
class Station:
    code: str
    name: str
    city: Optional[str] = None
    id: Optional[int] = None
