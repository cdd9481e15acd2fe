SR = 44100
MASTER_GAIN = 0.8

# Metronome click
CLICK_HZ = 1000
CLICK_MS = 35

# Task defaults
DEFAULT_TEMPO_BPM = 60
DEFAULT_BEAT_TOL_MS = 120
DEFAULT_MIN_NOTE_ACC = 0.95
DEFAULT_MIN_METRONOME_ACC = 0.9

# Default tempo if none in MIDI
DEFAULT_TEMPO_USPQN = 500_000  # 120 BPM

# Verdicts
VERDICT_PASS = "Pass"
VERDICT_NEEDS_WORK = "Needs work"
VERDICT_COMPLETED = "Completed"
VERDICT_NOT_STARTED = "Not started"

# Pitch classes of the black keys (C#, D#, F#, G#, A#)
ACCIDENTAL_CLASSES = {1, 3, 6, 8, 10}
NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Keyboard drawing
MAX_WHITE_KEY_HEIGHT = 120
BLACK_KEY_WIDTH_RATIO = 0.65
BLACK_KEY_HEIGHT_RATIO = 0.62
MARKER_RADIUS = 9

# Finger marker height as a fraction of the white key height
# (is_accidental, is_right_hand) -> fraction
MARKER_Y = {
    (True, True):   0.25,
    (True, False):  0.38,
    (False, True):  0.75,
    (False, False): 0.58,
}

# Note channel between the MIDI thread and the session
NOTE_QUEUE_SIZE = 256
POLL_S = 0.001

PROGRESS_FILE = "progress.json"
