import os
from datetime import datetime

import yaml

class RunFolderManager:
    def __init__(self, exp_type, log_dir):
        self.base = os.path.join(log_dir, "logs", exp_type)

    def create_run_folder(self, mode="experiment", tag=None):
        """
        Create logs/<exp_type>/runs/<timestamp>[_<tag>] (or debug/dbg_...).
        """
        name = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        if tag:
            name = f"{name}_{tag}"

        if mode == "experiment":
            path = os.path.join(self.base, "runs", name)
        else:
            path = os.path.join(self.base, "debug", f"dbg_{name}")

        os.makedirs(path, exist_ok=True)
        return path

    def save_config(self, config, run_dir):
        with open(os.path.join(run_dir, "config.yml"), "w") as f:
            yaml.safe_dump(config, f, sort_keys=False)
