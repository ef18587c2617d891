import logging
import threading
import json
import os
import tempfile

# Global lock for all JSON writes in this process
_json_write_lock = threading.Lock()

# Custom logging formatter to support colors
class ColoredFormatter(logging.Formatter):
    # Define color codes
    COLORS = {
        'DEBUG': '\033[94m',   # Blue
        'INFO': '\033[92m',    # Green
        'WARNING': '\033[93m', # Yellow
        'ERROR': '\033[91m',   # Red
        'CRITICAL': '\033[95m' # Magenta
    }
    RESET = '\033[0m'  # Reset color

    def format(self, record):
        # Add color to the log level name
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        return super().format(record)


def safe_write_json(path, data, **dump_kwargs):
    with _json_write_lock:
        dirpath = os.path.dirname(path) or "."
        # Default options
        options = {'ensure_ascii': False}
        options.update(dump_kwargs)

        # Create temporary file in same directory
        with tempfile.NamedTemporaryFile("w", dir=dirpath, delete=False, encoding="utf-8") as tmp:
            tmp_path = tmp.name
            try:
                json.dump(data, tmp, **options)
                tmp.flush()
                os.fsync(tmp.fileno())  # flush to disk
            except Exception:
                tmp.close()
                os.unlink(tmp_path)
                raise
        # Atomically replace target file
        os.replace(tmp_path, path)


def expand_home(path):
    """Expand a leading ~ and make the path absolute"""
    return os.path.abspath(os.path.expanduser(path))


def mtime_millis(stat_result):
    return stat_result.st_mtime_ns // 1_000_000
