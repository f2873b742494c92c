"""Simulation-wide constants for Cosmic Genesis."""

SAVE_FORMAT_VERSION = 1

# --- Cosmology ---
HUBBLE_CONSTANT = 67.4                # km/s/Mpc (Planck 2018)

# --- Physics tick ---
COSMIC_TIME_SCALE = 1e-3              # ms of frame time → billion years
EXPANSION_TIME_SCALE = 1e-3
FLUCTUATION_RATE = 0.1
FLUCTUATION_THRESHOLD = 100.0
FLUCTUATION_VACUUM_BONUS = 10.0
FLUCTUATION_ENTANGLEMENT_BONUS = 1.0
ENTROPY_RATE = 0.01
DECAY_RATE = 1e-4
DARK_ENERGY_CURVATURE_RATE = 0.1
EXTRACTION_ENTROPY_RATE = 0.1
EFFECT_GENERATION_RATE = 0.01

# Passive regeneration per unit of dt
NEUTRINO_REGEN_RATE = 0.1             # cosmic ray interactions
GRAVITATIONAL_WAVE_REGEN_RATE = 0.05  # merging compact objects
INFORMATION_REGEN_RATE = 0.02         # increasing complexity

# --- Economy ---
TRADE_TOLERANCE = 1.2                 # demand may be worth 20% more than offer
SCARCITY_FLOOR = 0.1
SCARCITY_NUMERATOR = 1000.0
SCARCITY_OFFSET = 100.0

BREAKTHROUGH_BASE = 1000.0
BREAKTHROUGH_PER_REQUIREMENT = 500.0

# --- Progression ---
UNDERSTANDING_PER_MASTERY = 0.1
DEFAULT_PATH_AFFINITY = 1.0
