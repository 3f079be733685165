import logging

from cf_core.base_implementations.default_logger import DefaultLogger

logger = logging.getLogger(__name__)

class ChecksLogger(DefaultLogger):
    def __init__(self, loss, log_dir="./logs"):
        super().__init__(log_dir)
        self.loss = loss

    def log_results(self, results, i=0):
        summary = {}
        for name, stats in results.items():
            passed = bool(stats.get("passed"))
            self.log_scalar(f"{name}_passed", int(passed), i)
            if "max_abs_error" in stats.get("json_summary", {}):
                self.log_scalar(f"{name}_max_abs_error", stats["json_summary"]["max_abs_error"], i)
            if not passed:
                logger.warning("%s: check '%s' failed", self.loss.name(), name)
            summary[name] = passed

        self.log_str({"loss": self.loss.name(), "checks": summary}, name="checks")
        return all(summary.values())
