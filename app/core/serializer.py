import json
from typing import Any, Dict


class JsonSerializer:
    def serialize(self, data: Dict[str, Any]) -> str:
        return json.dumps(data, separators=(",", ":"))

    def unserialize(self, data: str) -> Dict[str, Any]:
        return json.loads(data)
