"""Shared constants for villager generation and the reroll sequence.

Single source of truth for the form weight table and the timing defaults.
Runtime overrides for timing come from Settings (see config.py).
"""

# --- Form Weights ---

# Category 0 = common/base forms, higher categories = rarer/special forms.
# Declared order is the roulette iteration order.
FORM_WEIGHTS: dict[int, float] = {0: 70, 1: 15, 2: 5, 3: 4, 4: 3, 5: 2, 6: 1}

# Clothing is not randomized: every configuration wears this entry
DEFAULT_CLOTHING_ID = "Default_Clothing"


# --- Sequence Timing ---

SHUFFLE_FRAMES = 8
SHUFFLE_BASE_DELAY_MS = 50.0
SHUFFLE_MAX_DELAY_MS = 200.0

# Playback speed multipliers; waits are divided by these to match wall-clock time
DEATH_SPEED = 1.2
SPAWN_SPEED = 1.5


# --- Animations ---

IDLE_ANIMATION = "idle"

# Searched in order; the first name present in the skeleton wins
DEATH_ANIMATIONS = ("die", "dead", "Death/die", "ritual/sacrifice")
SPAWN_ANIMATIONS = ("spawn-in", "spawn-in-fall", "Reactions/react-spawn", "spawn")


# --- Sounds ---

SOUND_CUES = ("death", "spawn", "click", "shuffle", "land")
DEFAULT_CUE_VOLUME = 0.4
