import json
from functools import wraps

import click

from wle_ml import __version__
from wle_ml.common.config import PipelineConfig, load_pipeline_config
from wle_ml.common.errors import DataValidationError
from wle_ml.common.logging import setup_logger
from wle_ml.dataio.readers import read_observations
from wle_ml.dataio.writers import write_predictions
from wle_ml.models.forest import ForestModel
from wle_ml.pipeline import PipelineResult, reduce_features, run_pipeline, save_outputs, train_and_evaluate
from wle_ml.training.trainer import predict_table


def _fatal_on_data_errors(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DataValidationError as e:
            raise click.ClickException(str(e)) from e
    return wrapper


def _resolve_config(config, train_path=None, test_path=None, output_dir=None) -> PipelineConfig:
    cfg = load_pipeline_config(config)
    if train_path:
        cfg.loader.train_path = train_path
    if test_path:
        cfg.loader.test_path = test_path
    if output_dir:
        cfg.output_dir = output_dir
    return cfg


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default="INFO", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), help="Logging level")
def main(log_level):
    """Weight Lifting Exercise quality pipeline CLI"""
    setup_logger("wle_ml", log_level)


@main.command()
@click.option("--config", type=click.Path(exists=True), help="Pipeline config YAML path")
@click.option("--train-path", type=click.Path(exists=True), help="Labelled training CSV")
@click.option("--test-path", type=click.Path(exists=True), help="Unlabelled test CSV")
@click.option("--output-dir", type=click.Path(), help="Output directory")
@_fatal_on_data_errors
def run(config, train_path, test_path, output_dir):
    """Run the full pipeline: select features, train, evaluate and predict"""
    cfg = _resolve_config(config, train_path, test_path, output_dir)
    result = run_pipeline(cfg)
    click.echo(f"Holdout accuracy: {result.evaluation.accuracy_percent:.2f}%")
    click.echo(f"Expected out-of-sample error: {100 * result.evaluation.error_rate:.2f}%")
    click.echo(f"Outputs written to: {cfg.output_dir}")


@main.command("select-features")
@click.option("--config", type=click.Path(exists=True), help="Pipeline config YAML path")
@click.option("--train-path", type=click.Path(exists=True), help="Labelled training CSV")
@_fatal_on_data_errors
def select_features(config, train_path):
    """Partition the training table and print the feature reduction summary"""
    cfg = _resolve_config(config, train_path)
    _, _, reduction = reduce_features(cfg)
    click.echo(json.dumps(reduction.summary(), indent=2))


@main.command()
@click.option("--config", type=click.Path(exists=True), help="Pipeline config YAML path")
@click.option("--train-path", type=click.Path(exists=True), help="Labelled training CSV")
@click.option("--output-dir", type=click.Path(), help="Model output directory")
@_fatal_on_data_errors
def train(config, train_path, output_dir):
    """Train and evaluate the model, then save it"""
    cfg = _resolve_config(config, train_path, output_dir=output_dir)
    reduction, model, evaluation = train_and_evaluate(cfg)
    save_outputs(PipelineResult(reduction=reduction, model=model, evaluation=evaluation), cfg)
    click.echo(f"Holdout accuracy: {evaluation.accuracy_percent:.2f}%")
    click.echo(f"Saving model to: {cfg.model_path}")


@main.command()
@click.option("--model-path", type=click.Path(exists=True), required=True, help="Trained model path")
@click.option("--data-path", type=click.Path(exists=True), required=True, help="Input data path")
@click.option("--output-path", type=click.Path(), help="Predictions output path")
@_fatal_on_data_errors
def infer(model_path, data_path, output_path):
    """Run inference with trained model"""
    click.echo(f"Loading model from: {model_path}")
    model = ForestModel.load(model_path)
    predictions = predict_table(model, read_observations(data_path))
    if output_path:
        write_predictions(predictions, output_path)
        click.echo(f"Saving predictions to: {output_path}")
    else:
        click.echo(predictions.to_csv(index=False), nl=False)


if __name__ == "__main__":
    main()
