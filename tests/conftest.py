import logging

import numpy as np
import pandas as pd
import pytest

from wle_ml.common.config import ModelConfig, PipelineConfig

GRADES = ["A", "B", "C", "D", "E"]


def make_observations(n_rows: int = 100, seed: int = 0, with_label: bool = True) -> pd.DataFrame:
    """
    Synthetic sensor table: ``roll_belt`` tracks the grade, ``pitch_belt`` is a noisy
    copy of it (r ~ 0.95), ``gyros_arm_x`` and ``accel_dumbbell_y`` are noise and
    ``magnet_forearm_z`` is missing in every tenth row.
    """
    rng = np.random.RandomState(seed)
    grade_idx = np.arange(n_rows) % len(GRADES)
    roll = 2.0 * grade_idx + rng.normal(0, 0.5, n_rows)
    df = pd.DataFrame(
        {
            "user_name": rng.choice(["adelmo", "carlitos", "pedro"], n_rows),
            "num_window": rng.randint(1, 800, n_rows),
            "roll_belt": roll,
            "pitch_belt": roll + rng.normal(0, 0.9, n_rows),
            "gyros_arm_x": rng.normal(0, 1, n_rows),
            "accel_dumbbell_y": rng.uniform(-5, 5, n_rows),
            "magnet_forearm_z": rng.normal(0, 1, n_rows),
        }
    )
    df.loc[df.index % 10 == 0, "magnet_forearm_z"] = np.nan
    if with_label:
        df["classe"] = [GRADES[i] for i in grade_idx]
    else:
        df["problem_id"] = np.arange(1, n_rows + 1)
    return df


@pytest.fixture
def observations():
    return make_observations()


@pytest.fixture
def test_observations():
    return make_observations(n_rows=20, seed=1, with_label=False)


@pytest.fixture
def pipeline_config(tmp_path):
    config = PipelineConfig(output_dir=str(tmp_path / "artifacts"))
    config.model = ModelConfig(n_estimators=25, random_state=7)
    return config


@pytest.fixture(autouse=True)
def reset_cli_logging():
    # CliRunner swaps stdout; drop handlers bound to a stream that no longer exists.
    yield
    logger = logging.getLogger("wle_ml")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
