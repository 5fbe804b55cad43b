# src/codemerge/config.py

# Version-control metadata directory, always excluded.
VCS_DIR = ".git"
IMPLICIT_IGNORE_PATTERNS = [f"{VCS_DIR}/"]

# Only the copy at the traversal root is read; nested ones are never consulted.
IGNORE_FILENAME = ".gitignore"

ENCODING_NAME = "cl100k_base"

DEFAULT_TOP_COUNT = 10

# Overrides --output for the merge command when set.
OUTPUT_ENV_VAR = "OUTPUT_FILE"

FILE_HEADER = "File: "
