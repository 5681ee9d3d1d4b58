import argparse
from pathlib import Path
from kitti_dataset.config import AppConfig, DatasetConfig
from kitti_dataset.pipeline.Inspector import Inspector
from kitti_dataset.utils.logger import configure_logging

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Inspect a KITTI object or tracking dataset")
    parser.add_argument("dataset_dir", type=str, nargs="?", help="Root directory of the dataset")
    parser.add_argument("--kind", choices=["object", "tracking"], help="Dataset layout")
    parser.add_argument("--config", type=str, help="Path to config YAML")
    parser.add_argument("--test", action="store_true", help="Decode every sample and report failures")
    parser.add_argument("--workers", type=int, help="Number of frames checked in parallel")
    parser.add_argument("--report", type=str, help="Write a JSON report to this path")
    parser.add_argument("--plot-dir", type=str, help="Save bird's-eye / trajectory plots here")
    parser.add_argument("--log-level", type=str, help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar while checking frames")
    return parser.parse_args(argv)

def build_config(args) -> AppConfig:
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config = AppConfig.from_yaml(config_path)
    else:
        if not args.dataset_dir or not args.kind:
            raise ValueError("dataset_dir and --kind are required without --config")
        config = AppConfig(dataset=DatasetConfig(kind=args.kind, root_dir=args.dataset_dir))

    # CLI flags override the config file
    if args.dataset_dir:
        config.dataset.root_dir = args.dataset_dir
    if args.kind:
        config.dataset.kind = args.kind
    if args.test:
        config.inspect.test = True
    if args.workers is not None:
        config.inspect.workers = args.workers
    if args.report:
        config.inspect.report_path = args.report
    if args.plot_dir:
        config.inspect.plot_dir = args.plot_dir
    if args.no_progress:
        config.inspect.progress = False
    if args.log_level:
        config.logging.level = args.log_level
    return config

def main(argv=None):
    args = parse_args(argv)
    config = build_config(args)
    configure_logging(config.logging.level, rich=config.logging.rich)

    inspector = Inspector(config)
    results = inspector.run()
    return 1 if results.get("failures") else 0

if __name__ == "__main__":
    raise SystemExit(main())
