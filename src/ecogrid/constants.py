GRID_WIDTH = 4
GRID_HEIGHT = 4

# Animation timings (seconds). Systems treat a move as in flight until these elapse.
SLIDE_DURATION = 0.75
BLINK_DURATION = 1.5

# Animation kinds exchanged through EVENT_ANIMATION_START / EVENT_ANIMATION_COMPLETE.
ANIM_SLIDE = "slide"
ANIM_BLINK = "blink"

# Move phases tracked on MoveState.
PHASE_IDLE = "idle"
PHASE_SLIDING = "sliding"
PHASE_REMOVING = "removing"

# Reasons carried by EVENT_MOVE_REJECTED.
REJECT_BUSY = "busy"
REJECT_NO_SLIDE = "no_slide"
REJECT_SOLVED = "solved"
