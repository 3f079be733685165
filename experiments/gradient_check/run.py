import os
import sys
import logging

from cf_core.losses.factory import create_from_config
from cf_core.utils.debugging import LossDebugger

from cf_core.base_implementations.config_manager import ConfigManager
from cf_core.base_implementations.run_folder_manager import RunFolderManager

from experiments.gradient_check.checks_logger import ChecksLogger


CURRENT_DIR = os.path.dirname(__file__)
LOG_DIR = os.path.dirname(os.path.dirname(CURRENT_DIR))
EXPERIMENT_NAME = 'gradient_check'


def main(config_path=None, log_dir=LOG_DIR):

    # ------------------------------
    # 1. Load + validate config
    # ------------------------------
    template_path = os.path.join(CURRENT_DIR, "config_template.yml")
    user_config_path = config_path or os.path.join(CURRENT_DIR, "config.yml")

    cfg_manager = ConfigManager(template_path)
    config = cfg_manager.merge(cfg_manager.load(user_config_path))

    # ------------------------------
    # 2. Build loss
    # ------------------------------
    loss = create_from_config(config)

    # ------------------------------
    # 3. Prepare run folder + debugger
    # ------------------------------
    folder_mgr = RunFolderManager(exp_type=EXPERIMENT_NAME, log_dir=log_dir)
    run_dir = folder_mgr.create_run_folder(tag=loss.name())
    folder_mgr.save_config(config, run_dir)

    logger = ChecksLogger(loss, log_dir=run_dir)
    logger.save_config(config)

    debugger = LossDebugger(
        loss,
        log_dir=os.path.join(run_dir, "artifacts"),
        step=config["step"],
        tolerance=config["tolerance"],
        progress=config["progress"],
    )

    # ------------------------------
    # 4. Run checks
    # ------------------------------
    lo, hi = config["pred_range"]
    results = {}
    for name in config["checks"]:
        if name in ("gradient_check", "nonnegativity", "loss_curve"):
            results[name] = debugger.run(name, lo=lo, hi=hi, n=config["num_points"])
        else:
            results[name] = debugger.run(name)

    return logger.log_results(results)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(0 if main() else 1)
