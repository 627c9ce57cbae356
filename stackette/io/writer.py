"""
File writer utility – one template per stack plus a manifest.json.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from stackette.utils.ids import snake_case

__all__ = ["TemplateWriter"]


class TemplateWriter:  # noqa: D101
    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self._artifacts: dict[str, dict[str, Any]] = {}

    # -------------------------------------------------------------- #

    def write_stack(self, stack_name: str, template: Dict[str, Any]) -> Path:
        """Write *template* as ``<stack_name>.template.json`` and record it."""
        file_path = self.root / f"{stack_name}.template.json"
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(template, f, indent=1, ensure_ascii=False)
            f.write("\n")

        self._artifacts[stack_name] = {
            "type": "aws:cloudformation:stack",
            "properties": {"templateFile": file_path.name},
            "displayName": stack_name,
            "resourceCount": len(template.get("Resources", {})),
        }
        return file_path

    # -------------------------------------------------------------- #

    def finalize(self, app_name: str = "app") -> Path:
        """Write manifest.json listing every stack written so far."""
        meta_path = self.root / "manifest.json"
        meta = {
            "app": snake_case(app_name) or "app",
            "artifacts": self._artifacts,
            "generated_by": "stackette v0.1.0",
        }
        meta_path.write_text(json.dumps(meta, indent=2))
        return meta_path
