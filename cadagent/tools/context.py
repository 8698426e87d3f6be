from __future__ import annotations
from collections import Counter
from typing import Iterable, List

from ..space import Space

# =====================================================
# CONTEXT / AUDIT
# =====================================================

def drawing_context(space: Space) -> str:
    """Short description of the drawing, sent along with every request to the model."""
    live = space.live_entities()
    kinds = Counter(e.kind.value for e in live)
    lines = [
        f"Insunits: {space.insunits}",
        f"Ltscale: {space.ltscale:g}",
        f"Cecolor (index): {space.cecolor}",
        f"Layers: {', '.join(layer.name for layer in space.layers)}",
        f"Entities: {len(live)}",
    ]
    if kinds:
        lines.append("By type: " + ", ".join(f"{k}={n}" for k, n in sorted(kinds.items())))
    blocks = space.block_names()
    if blocks:
        lines.append(f"Blocks: {', '.join(blocks)}")
    return "\n".join(lines) + "\n"


def audit_layers(space: Space, required: Iterable[str]) -> List[str]:
    findings = []
    for name in required:
        layer = space.layer(name)
        if layer is None:
            findings.append(f"Missing layer: {name}")
            continue
        if layer.is_off:
            findings.append(f"Layer {name} is OFF (recommended: turn it ON).")
        if layer.is_frozen:
            findings.append(f"Layer {name} is FROZEN (recommended: thaw it).")
        if not layer.is_plottable:
            findings.append(f"Layer {name} is not plottable (IsPlottable = false).")
    return findings
