import json
import os
import logging
import functools
from collections import defaultdict
from datetime import datetime

import numpy as np
import matplotlib.pyplot as plt
from tqdm import tqdm

logger = logging.getLogger(__name__)

# Targets used for losses that accept any real label.
REGRESSION_TARGETS = (-1.5, 0.0, 2.0)

# ============================================================
# 1) HELPER FUNCTIONS (Saving & Plotting)
# ============================================================

def save_log(log_dict, path):
    """Saves dictionary as JSON, handling Numpy conversion."""
    def clean(obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, dict):
            return {k: clean(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [clean(x) for x in obj]
        if isinstance(obj, (np.generic, np.number)):
            return obj.item()
        return obj

    clean_log = clean(log_dict)
    with open(path, "w") as f:
        json.dump(clean_log, f, indent=2)


def plot_loss_curve_helper(data, title):
    # data: tuple (preds, {label: (losses, grads)})
    preds, curves = data
    fig, (ax_l, ax_g) = plt.subplots(1, 2, figsize=(12, 5))
    for label, (losses, grads) in curves.items():
        ax_l.plot(preds, losses, label=f"truth={label}")
        ax_g.plot(preds, grads, label=f"truth={label}")
    ax_l.set_xlabel("pred")
    ax_l.set_ylabel("loss")
    ax_g.set_xlabel("pred")
    ax_g.set_ylabel("d loss / d pred")
    for ax in (ax_l, ax_g):
        ax.legend()
        ax.grid(True, alpha=0.3)
    fig.suptitle(title)


def plot_gradient_error_helper(data, title):
    # data: tuple (preds, abs_errors)
    preds, errors = data
    plt.figure(figsize=(10, 6))
    plt.semilogy(preds, np.maximum(errors, 1e-18), marker=".", linestyle="none")
    plt.xlabel("pred")
    plt.ylabel("|finite difference - gradient|")
    plt.title(title)
    plt.grid(True, alpha=0.3)


# ============================================================
# 2) CALCULATION KERNELS
# ============================================================

def label_set(loss):
    return loss.labels if loss.labels is not None else REGRESSION_TARGETS


def pred_grid(loss, lo=-25.0, hi=25.0, n=201, margin=0.05):
    """Evenly spaced preds, clipped into the loss's pred_bounds if it has any."""
    if loss.pred_bounds is not None:
        b_lo, b_hi = loss.pred_bounds
        lo, hi = b_lo + margin, b_hi - margin
    return np.linspace(lo, hi, n)


def finite_difference(loss, pred, truth, step=1e-5):
    return (loss.evaluate(pred + step, truth) - loss.evaluate(pred - step, truth)) / (2 * step)


def near_branch(loss, pred, truth, step=1e-5):
    """True when the stencil pred +- step straddles a kink or a formula switch."""
    points = tuple(loss.branch_points)
    if loss.kink_margin is not None:
        points += (loss.kink_margin,)
    if loss.margin_based:
        x, reach = pred * truth, 2 * step * abs(truth)
    else:
        x, reach = pred, 2 * step
    return any(abs(x - p) <= reach for p in points)


def gradient_errors(loss, preds, truth, step=1e-5, progress=False):
    checked, errors = [], []
    for pred in tqdm(preds, desc=f"{loss.name()} truth={truth}", leave=False, disable=not progress):
        pred = float(pred)
        if near_branch(loss, pred, truth, step):
            continue
        fd = finite_difference(loss, pred, truth, step)
        checked.append(pred)
        errors.append(abs(fd - loss.gradient(pred, truth)))
    return np.array(checked), np.array(errors)


# ============================================================
# 3) DECORATOR & DEBUGGER CLASS
# ============================================================

def log_results_on_run(func):
    """
    Decorator for LossDebugger.run(). Saves the summary and plot artifacts
    of a check into a timestamped folder under the debugger's log_dir.
    """
    @functools.wraps(func)
    def wrapper(self, name, *args, **kwargs):
        log_run = kwargs.pop('log_run', self.log_enabled)

        stats = func(self, name, *args, **kwargs)

        if not log_run or not isinstance(stats, dict):
            return stats

        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            run_dir = os.path.join(self.log_dir, f"{self.loss.name()}_{name}_{timestamp}")
            os.makedirs(run_dir, exist_ok=True)
            stats["run_dir"] = run_dir

            if 'json_summary' in stats:
                save_log(stats['json_summary'], os.path.join(run_dir, "summary.json"))

            for key, artifact in stats.get('plot_artifacts', {}).items():
                artifact['plot_fn'](artifact['data'], title=f"{self.loss.name()} {name}: {key}")
                plt.savefig(os.path.join(run_dir, f"{key}.png"))
                plt.close("all")

        except OSError:
            logger.exception("Could not save artifacts for check '%s'", name)

        return stats
    return wrapper


class LossDebugger:
    """
    Runs numerical sanity checks against a single Loss instance.

    Every check returns a dict with a boolean ``passed`` and a
    ``json_summary``; some also return ``plot_artifacts``.
    """

    def __init__(self, loss, log_dir=None, step=1e-5, tolerance=1e-5, progress=False):
        self.loss = loss
        self.step = step
        self.tolerance = tolerance
        self.progress = progress

        self.log = defaultdict(list)

        self.log_dir = log_dir
        self.log_enabled = log_dir is not None
        if self.log_enabled:
            os.makedirs(self.log_dir, exist_ok=True)
            logger.info("Logging enabled. Root: %s", self.log_dir)

        self.tests = {
            "gradient_check": self._run_gradient_check,
            "nonnegativity": self._run_nonnegativity,
            "finiteness": self._run_finiteness,
            "idempotence": self._run_idempotence,
            "loss_curve": self._run_loss_curve,
        }

    def add_test(self, name, fn):
        self.tests[name] = fn

    @log_results_on_run
    def run(self, name, *args, **kwargs):
        if name not in self.tests:
            raise ValueError(f"Unknown check: {name}")
        stats = self.tests[name](*args, **kwargs)
        self.log[name].append(stats.get("passed"))
        return stats

    def run_all(self, names=None, **kwargs):
        names = names or list(self.tests)
        return {name: self.run(name, **kwargs) for name in names}

    # --- Internal Check Implementations ---

    def _run_gradient_check(self, lo=-25.0, hi=25.0, n=201):
        preds = pred_grid(self.loss, lo, hi, n)
        worst = {}
        all_preds, all_errors = [], []
        for truth in label_set(self.loss):
            checked, errors = gradient_errors(self.loss, preds, truth, self.step, self.progress)
            worst[str(truth)] = float(errors.max()) if errors.size else 0.0
            all_preds.append(checked)
            all_errors.append(errors)

        max_error = max(worst.values())
        return {
            "passed": max_error <= self.tolerance,
            "json_summary": {
                "max_abs_error": max_error,
                "max_abs_error_by_label": worst,
                "step": self.step,
                "tolerance": self.tolerance,
            },
            "plot_artifacts": {
                "gradient_error": {
                    "data": (np.concatenate(all_preds), np.concatenate(all_errors)),
                    "plot_fn": plot_gradient_error_helper,
                }
            },
        }

    def _run_nonnegativity(self, lo=-25.0, hi=25.0, n=201):
        preds = pred_grid(self.loss, lo, hi, n, margin=0.0)
        min_loss = min(
            self.loss.evaluate(float(p), truth)
            for truth in label_set(self.loss) for p in preds
        )
        return {
            "passed": min_loss >= 0.0,
            "json_summary": {"min_loss": min_loss},
        }

    def _run_finiteness(self, lo=-1e3, hi=1e3, n=401):
        preds = pred_grid(self.loss, lo, hi, n, margin=0.0)
        bad = []
        for truth in label_set(self.loss):
            for p in tqdm(preds, desc=f"{self.loss.name()} finiteness", leave=False, disable=not self.progress):
                p = float(p)
                values = [self.loss.evaluate(p, truth), self.loss.predict(p)]
                # the gradient is only defined strictly inside pred_bounds
                if self.loss.pred_bounds is None or self.loss.pred_bounds[0] < p < self.loss.pred_bounds[1]:
                    values.append(self.loss.gradient(p, truth))
                if not all(np.isfinite(values)):
                    bad.append({"pred": p, "truth": truth, "values": values})
        return {
            "passed": not bad,
            "json_summary": {"non_finite": bad, "points": len(preds)},
        }

    def _run_idempotence(self, lo=-25.0, hi=25.0, n=51, repeats=3):
        preds = pred_grid(self.loss, lo, hi, n)
        mismatches = 0
        for truth in label_set(self.loss):
            for p in preds:
                p = float(p)
                first = (self.loss.evaluate(p, truth), self.loss.gradient(p, truth), self.loss.predict(p))
                for _ in range(repeats):
                    again = (self.loss.evaluate(p, truth), self.loss.gradient(p, truth), self.loss.predict(p))
                    if again != first:
                        mismatches += 1
        return {
            "passed": mismatches == 0,
            "json_summary": {"mismatches": mismatches, "repeats": repeats},
        }

    def _run_loss_curve(self, lo=-5.0, hi=5.0, n=201):
        preds = pred_grid(self.loss, lo, hi, n)
        curves = {}
        for truth in label_set(self.loss):
            losses = [self.loss.evaluate(float(p), truth) for p in preds]
            grads = [self.loss.gradient(float(p), truth) for p in preds]
            curves[str(truth)] = (losses, grads)
        return {
            "passed": True,
            "json_summary": {"labels": list(curves), "points": len(preds)},
            "plot_artifacts": {
                "curve": {
                    "data": (preds, curves),
                    "plot_fn": plot_loss_curve_helper,
                }
            },
        }

    def get_log(self):
        return dict(self.log)
