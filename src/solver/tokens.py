"""
Render token decoding.

The game surface reports each cell as an opaque class string. Nine of those
strings carry a clue, one marks an untouched cell and one marks the mine
that ended the game. Anything else is not a classification change.
"""
from typing import Dict, Optional


# ============================================================================
# Tokens
# ============================================================================

BLANK_TOKEN = "square blank"
FLAGGED_TOKEN = "square bombflagged"
MINE_TRIGGER_TOKEN = "square bombdeath"
MINE_REVEALED_TOKEN = "square bombrevealed"

CLUE_TOKENS: Dict[str, int] = {
    f"square open{digit}": digit for digit in range(9)
}


# ============================================================================
# Action Log Labels
# ============================================================================

LOG_FLAG = "FLAGGING"
LOG_REVEAL = "REVEALING"
LOG_REVEAL_RANDOM = "REVEALING RANDOM"
LOG_GAME_RESET = "RESETTING GAME"
LOG_GAME_COMPLETE = "GAME SHOULD BE COMPLETE"


def decode_clue(token: str) -> Optional[int]:
    """Return the clue encoded by ``token``, or None if it is not a clue."""
    return CLUE_TOKENS.get(token)


def is_mine_trigger(token: str) -> bool:
    """Check if ``token`` marks the mine that was just clicked."""
    return token == MINE_TRIGGER_TOKEN


def clue_token(digit: int) -> str:
    """Build the token a surface renders for a revealed clue."""
    if not 0 <= digit <= 8:
        raise ValueError(f"Clue out of range: {digit}")
    return f"square open{digit}"
