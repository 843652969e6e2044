"""Records produced by the extraction pass."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict


@dataclass
class JournalInfo:
    """Journal name, homepage and the guessed OAI-PMH endpoint."""

    name: str = ""
    homepage: str = ""
    endpoint: str = ""

    def to_dict(self) -> Dict[str, str]:
        # External field name for the endpoint is "oai".
        return {"name": self.name, "homepage": self.homepage, "oai": self.endpoint}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))
