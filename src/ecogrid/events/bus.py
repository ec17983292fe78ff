from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored in a variable alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT
# ============================================================================
EVENT_BOARD_CLICK = "board_click"                  # payload: board_entity=int, x=int, y=int


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_BOARD_CREATED = "board_created"              # payload: board_entity=int, board_name=str
EVENT_MOVE_REJECTED = "move_rejected"              # payload: board_entity=int, x=int, y=int, reason=str
EVENT_SLIDE_APPLIED = "slide_applied"              # payload: board_entity=int, moves=list[(fx,fy,tx,ty)], hole=(x,y)
EVENT_MATCH_FOUND = "match_found"                  # payload: board_entity=int, type_id=int, corner=(x,y), positions=list[(x,y)], delays=dict[(x,y),int]
EVENT_PIECES_CLEARED = "pieces_cleared"            # payload: board_entity=int, type_id=int, cleared=list[(x,y)], rescued=list[(x,y)], remaining=int
EVENT_MOVE_COMPLETE = "move_complete"              # payload: board_entity=int, moves_made=int
EVENT_BOARD_SOLVED = "board_solved"                # payload: board_entity=int, moves_made=int


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: board_entity=int, kind=str, items=list
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: board_entity=int, kind=str, items=list


# ============================================================================
# SESSION
# ============================================================================
EVENT_SESSION_PROGRESS = "session_progress"        # payload: finished=int, total=int
EVENT_SESSION_COMPLETE = "session_complete"        # payload: total=int
