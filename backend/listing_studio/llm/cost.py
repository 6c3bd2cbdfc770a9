"""Token cost model, in US cents.

Integer arithmetic only: per-million-token rates are kept in cents and the
sum is floored once, so identical token counts always price identically.
"""

from __future__ import annotations

# $3.00 / $15.00 per million input / output tokens
INPUT_CENTS_PER_MTOK = 300
OUTPUT_CENTS_PER_MTOK = 1500
TOKENS_PER_MTOK = 1_000_000


def calculate_cost_cents(input_tokens: int, output_tokens: int) -> int:
    if input_tokens < 0 or output_tokens < 0:
        raise ValueError("token counts must be non-negative")
    return (
        input_tokens * INPUT_CENTS_PER_MTOK + output_tokens * OUTPUT_CENTS_PER_MTOK
    ) // TOKENS_PER_MTOK
