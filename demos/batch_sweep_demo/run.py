"""Batch Sweep demo runner.

Compiles one compound-interest formula and evaluates it against a grid
of rate/term bindings without re-parsing.  Writes a deterministic
batch_manifest.json (sorted keys, rounded values, no timestamps).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_DEMO_DIR = Path(__file__).parent

FORMULA = "amount * (1 + rate / n) ^ (n * years)"

_AMOUNT = 1000.0
_PERIODS_PER_YEAR = 12.0
_RATES = [0.03, 0.05, 0.07]
_YEARS = [1.0, 5.0, 10.0]


def run_demo(output_dir: Path | None = None) -> dict[str, Any]:
    """Execute the batch sweep demo end-to-end.

    Args:
        output_dir: Directory to write output files. Defaults to the demo directory.

    Returns:
        Batch manifest dict.
    """
    from rpneval import VariableList, compile_expression, release_compiled

    out = output_dir or _DEMO_DIR

    # 1. Compile once
    compiled = compile_expression(FORMULA)

    # 2. Evaluate every binding set against the stored RPN (deterministic order)
    results: list[dict[str, Any]] = []
    try:
        for idx, (rate, years) in enumerate((r, y) for r in _RATES for y in _YEARS):
            bindings = VariableList()
            bindings.append("amount", _AMOUNT)
            bindings.append("n", _PERIODS_PER_YEAR)
            bindings.append("rate", rate)
            bindings.append("years", years)
            value = compiled.evaluate(bindings)
            results.append({
                "index": idx,
                "rate": rate,
                "value": round(value, 6),
                "years": years,
            })
            print(f"  [{idx}] rate={rate:.2f} years={years:g} -> {value:.2f}")
        postfix = compiled.to_postfix()
    finally:
        release_compiled(compiled)

    # 3. Write deterministic manifest
    manifest = {
        "demo": "batch_sweep",
        "formula": FORMULA,
        "postfix": postfix,
        "result_count": len(results),
        "results": results,
    }

    manifest_path = out / "batch_manifest.json"
    manifest_path.write_text(
        json.dumps(manifest, indent=2, sort_keys=True) + "\n"
    )

    print(f"Batch manifest written: {len(results)} result(s)")
    return manifest
