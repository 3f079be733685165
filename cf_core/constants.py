# Floor for probabilities inside log() of the logistic loss.
LOGISTIC_EPS = 1e-4

# Beyond this magnitude log(1 + exp(-x)) is replaced by its tail expansion.
EXP_CUTOFF = 18.0

BINARY_LABELS = (0.0, 1.0)
SIGNED_LABELS = (-1.0, 1.0)
