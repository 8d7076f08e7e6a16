"""Judge reply parsing.

A judge reply is free text.  Two markers are read from it, both matched
case-insensitively and anywhere in the text::

    ANSWER:    <ws>* ( YES | NO )
    REASONING: <ws>* <everything up to the end of the text>

The first ``ANSWER:`` marker decides the verdict: the run passes only if it
is followed by ``YES``.  Reasoning is the text after the first
``REASONING:`` marker, stripped of surrounding whitespace.

Parsing never raises.  A reply without a ``YES`` answer fails, and a reply
without (or with blank) reasoning gets :data:`NO_REASONING`, so an
ambiguous judge can never produce a pass.
"""

from __future__ import annotations

import re

from ui_component_eval.models import NO_REASONING, Verdict

_ANSWER_RE = re.compile(r"ANSWER:\s*(YES|NO)", re.IGNORECASE)
_REASONING_RE = re.compile(r"REASONING:\s*(.*)", re.IGNORECASE | re.DOTALL)


def parse_verdict(reply: str) -> Verdict:
    """Extract a pass/fail verdict and rationale from a judge reply.

    Parameters
    ----------
    reply : str
        Raw judge output.

    Returns
    -------
    Verdict
    """
    answer = _ANSWER_RE.search(reply or "")
    reasoning = _REASONING_RE.search(reply or "")

    passed = answer is not None and answer.group(1).lower() == "yes"
    text = reasoning.group(1).strip() if reasoning else ""
    return Verdict(passed=passed, reasoning=text or NO_REASONING)
