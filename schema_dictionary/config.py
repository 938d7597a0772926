"""Configuration settings for the schema data dictionary."""
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# --- Logging ---
LOG_LEVEL = os.environ.get("SCHEMA_DICTIONARY_LOG_LEVEL", "INFO").upper()

# --- Server ---
SERVER_HOST = os.environ.get("SCHEMA_DICTIONARY_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("SCHEMA_DICTIONARY_PORT", "7860"))

# --- Output ---
CSV_FILE_NAME = os.environ.get("SCHEMA_DICTIONARY_CSV_NAME", "data_dictionary.csv")

# --- Table ---
DEFAULT_TABLE_TITLE = "Dataset Schema"
JSON_PREVIEW_LIMIT = 100  # Characters of JSON shown before truncating a cell
PATTERN_PREVIEW_LIMIT = 20

MAIN_SCHEMA_HINT = 'Could not identify main schema. Please ensure one schema has type: "array" with items.'
