"""
Tournament-wide constants for the golf scoring bot.

Every fixed number the scoring rules depend on lives here so the engine,
the database layer and the cogs agree on them.
"""

class StablefordConstants:
    """Stableford points keyed by (strokes - par)."""
    
    POINTS_BY_DIFFERENTIAL = {
        -5: 12,
        -4: 10,
        -3: 8,
        -2: 6,
        -1: 4,
        0: 2,
        1: 1,
        2: 0,
        3: -1,
    }
    
    MIN_DIFFERENTIAL = -5
    MAX_DIFFERENTIAL = 3

class HandicapConstants:
    """Constants for per-hole stroke allocation."""
    
    # Handicaps at or below this receive strokes, above it they give holes back
    ALLOCATION_BASE = 36
    HOLES_PER_ROUND = 18
    
    # Returned by the allocator when a hole is given back
    GIVEBACK_SENTINEL = -1
    
    # Mosley Open nets never subtract less than this
    MOSLEY_HANDICAP_FLOOR = 16

class TournamentConstants:
    """Shape of the tournament."""
    
    DAYS = (1, 2, 3)
    HOLES = tuple(range(1, 19))
    
    # Rounds that count toward the cut
    CUT_DAYS = (1, 2)
    
    # Keys under which the cut is persisted in the settings table
    SETTING_CUT_LINE_SCORE = "cutLineScore"
    SETTING_IS_CUT_APPLIED = "isCutApplied"

class UIConstants:
    """Constants for Discord UI elements."""
    
    DEFAULT_EMBED_COLOR = 0x2e8b57  # Fairway green
    GOLD_RANK_COLOR = 0xffd700
    ERROR_COLOR = 0xe74c3c
    SUCCESS_COLOR = 0x2ecc71
    
    # Embed descriptions are capped at 4096 characters
    MAX_TABLE_ROWS = 40
    MAX_NAME_WIDTH = 16
    
    TROPHY_EMOJI = "🏆"
    FLAG_EMOJI = "⛳"
    SCISSORS_EMOJI = "✂️"
