"""JSON export of the aggregate.

Why JSON:
- Interoperability with other tools and pipelines.
- `model_dump(mode="json")` is exactly the public output shape.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import PersonInfo


def render_person_json(person: PersonInfo) -> str:
    """Render `PersonInfo` as stable, indented JSON (field order preserved)."""

    payload = person.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2)


def export_person_json(*, person: PersonInfo, output_path: Path) -> Path:
    """Write `PersonInfo` to `output_path` as UTF-8 JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_person_json(person) + "\n", encoding="utf-8")
    return output_path
