import os
import logging

import mlflow
import wandb
import hydra
from omegaconf import DictConfig, OmegaConf

from airbnb_cleaning.persist import read_listings, write_snapshot
from airbnb_cleaning.pipeline import clean_listings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def log_snapshots_to_wandb(config: DictConfig, paths, stats):
    run = wandb.init(
        project=config["wandb"]["project"],
        entity=config["wandb"].get("entity"),
        job_type="clean_listings",
        mode=config["wandb"]["mode"],
        group=str(config["main"]["experiment_name"]),
    )
    run.config.update(OmegaConf.to_container(config, resolve=True))

    for name, path, description in paths:
        artifact = wandb.Artifact(
            name=name,
            type="clean_data",
            description=description,
            metadata=stats,
        )
        artifact.add_file(path)
        run.log_artifact(artifact)

    run.summary.update(stats)
    run.finish()


@hydra.main(version_base=None, config_path=".", config_name="config")
def go(config: DictConfig):

    # Hydra changes the working dir; resolve paths against the project root
    proj_root = hydra.utils.get_original_cwd()
    mlruns_dir = os.path.join(proj_root, "mlruns")
    os.makedirs(mlruns_dir, exist_ok=True)
    mlflow.set_tracking_uri(f"file://{mlruns_dir}")
    mlflow.set_experiment(str(config["main"]["experiment_name"]))

    input_csv = hydra.utils.to_absolute_path(config["data"]["input_csv"])
    full_path = hydra.utils.to_absolute_path(config["data"]["full_snapshot"])
    trimmed_path = hydra.utils.to_absolute_path(config["data"]["trimmed_snapshot"])

    with mlflow.start_run():
        mlflow.log_param("input_csv", input_csv)
        mlflow.log_param("steps", config["main"]["steps"])

        # 1) Load the raw listings
        df = read_listings(input_csv)

        # 2) Clean
        result = clean_listings(df, config, steps=config["main"]["steps"])

        # 3) Persist both snapshots
        write_snapshot(result.full, full_path)
        write_snapshot(result.trimmed, trimmed_path)

        for key, value in result.stats.items():
            mlflow.log_metric(key, value)
        mlflow.log_artifact(full_path, artifact_path="clean_data")
        mlflow.log_artifact(trimmed_path, artifact_path="clean_data")

    log_snapshots_to_wandb(
        config,
        [
            (os.path.basename(full_path), full_path, "Cleaned listings, outliers retained"),
            (os.path.basename(trimmed_path), trimmed_path, "Cleaned listings, outliers removed"),
        ],
        result.stats,
    )

    logger.info(f"Rows: raw={result.stats['rows_raw']}, full={result.stats['rows_full']}, "
                f"trimmed={result.stats['rows_trimmed']}")
    logger.info(f"Wrote snapshots to: {full_path} and {trimmed_path}")


if __name__ == "__main__":
    go()
