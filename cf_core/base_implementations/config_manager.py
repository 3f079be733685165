import copy

import yaml

from cf_core.losses.kinds import LossKind

class ConfigManager:
    """
    Loads a YAML template and validates user configs against it.

    Only keys present in the template are accepted; the loss kind and the
    score range are checked up front so a bad config fails before any run
    folder is populated.
    """

    def __init__(self, template_path):
        self.template = self.load(template_path)

    def validate(self, overrides):
        for key in overrides:
            if key not in self.template:
                raise ValueError(f"Invalid config parameter: {key}")

        if overrides.get("strict") and "loss" in overrides:
            LossKind.from_name(str(overrides["loss"]))

        if "pred_range" in overrides:
            pred_range = overrides["pred_range"]
            if not isinstance(pred_range, (list, tuple)) or len(pred_range) != 2:
                raise ValueError(f"pred_range must be a [lo, hi] pair, got {pred_range}")
            lo, hi = pred_range
            if not lo < hi:
                raise ValueError(f"pred_range must be increasing, got {pred_range}")

        if "checks" in overrides and not isinstance(overrides["checks"], list):
            raise ValueError("checks must be a list of check names")

    def merge(self, overrides):
        self.validate(overrides)
        cfg = copy.deepcopy(self.template)
        cfg.update(overrides)
        return cfg

    def load(self, concrete_config_path):
        with open(concrete_config_path, "r") as f:
            return yaml.safe_load(f) or {}

    def save(self, cfg, path):
        with open(path, "w") as f:
            yaml.safe_dump(cfg, f)
