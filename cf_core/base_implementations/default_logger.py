import os
import json

from cf_core.abstractions.logger import Logger
from cf_core.utils.debugging import save_log

class DefaultLogger(Logger):
    """Writes run results as plain files under log_dir."""

    def __init__(self, log_dir):
        self.log_dir = log_dir
        os.makedirs(log_dir, exist_ok=True)

    def save_config(self, config):
        with open(os.path.join(self.log_dir, "config.json"), "w") as f:
            json.dump(config, f, indent=4)

    def log_scalar(self, name, value, step):
        # repr keeps every digit of a double
        with open(os.path.join(self.log_dir, f"{name}.txt"), "a") as f:
            f.write(f"{step}: {float(value)!r}\n")

    def log_str(self, string, name="results"):
        save_log(string, os.path.join(self.log_dir, f"{name}.json"))
