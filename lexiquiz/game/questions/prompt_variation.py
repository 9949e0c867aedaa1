from __future__ import annotations

import random
import re

VARIATION_RE = re.compile(r"\{([^{}]+)\}")


def expand_prompt_variations(template: str, rng: random.Random | None = None) -> str:
    chooser = rng or random

    def _pick(match: re.Match[str]) -> str:
        alternatives = [part.strip() for part in match.group(1).split("|")]
        alternatives = [part for part in alternatives if part]
        if not alternatives:
            return ""
        return chooser.choice(alternatives)

    return VARIATION_RE.sub(_pick, template)
