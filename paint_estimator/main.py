import argparse
import logging
import pathlib
import sys

from paint_estimator.config import load_settings
from paint_estimator.loader import load_configurations, load_coverage_table, load_pricing_table
from paint_estimator.models import LabourMode
from paint_estimator.pipeline import EstimationPipeline
from paint_estimator.utils.errors import InvalidConfiguration
from paint_estimator.utils.file_utils import write_output
from paint_estimator.utils.logs import setup_logging


def run_estimate(configs_path, coverage_path, pricing_path, labour_mode=None, laborers=None, days=None,
                 dealer_margin=None, settings_path=None):
    settings = load_settings(pathlib.Path(settings_path) if settings_path else None)

    configs = load_configurations(configs_path)
    coverage = load_coverage_table(coverage_path)
    pricing = load_pricing_table(pricing_path)
    logging.info("Loaded %d configurations, %d coverage rows, %d pricing rows",
                 len(configs), len(coverage), len(pricing))

    pipeline = EstimationPipeline(coverage, pricing, settings)
    return pipeline.run(
        configs,
        labour_mode=LabourMode(labour_mode) if labour_mode else None,
        laborers_per_day=laborers,
        desired_completion_days=days,
        dealer_margin_percentage=dealer_margin,
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Estimate paint materials, labour and project cost")
    parser.add_argument("--configs", required=True, help="Area configurations JSON")
    parser.add_argument("--coverage", required=True, help="Coverage table JSON")
    parser.add_argument("--pricing", required=True, help="Dealer pricing table JSON")
    parser.add_argument("--labour-mode", choices=[m.value for m in LabourMode], default=None,
                        help="auto: days from laborers/day, manual: laborers from desired days")
    parser.add_argument("--laborers", type=int, default=None, help="Laborers per day (auto mode)")
    parser.add_argument("--days", type=int, default=None, help="Desired completion days (manual mode)")
    parser.add_argument("--dealer-margin", type=float, default=None, help="Dealer margin percentage 0-100")
    parser.add_argument("--settings", default=None, help="Path to estimator.yaml")
    parser.add_argument("--output", default="estimate", help="Output name (written under outputs/)")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None, help="Also log to this file under logs/")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        result = run_estimate(
            args.configs, args.coverage, args.pricing,
            labour_mode=args.labour_mode,
            laborers=args.laborers,
            days=args.days,
            dealer_margin=args.dealer_margin,
            settings_path=args.settings,
        )
    except InvalidConfiguration as e:
        logging.error("%s", e)
        for err in e.errors:
            logging.error("  %s", err)
        return 2

    for warning in result.warnings:
        logging.warning("%s", warning)

    path = write_output(args.output, result.to_dict())
    logging.info("Estimate written to %s (total %.2f)", path, result.total_cost)
    return 0


if __name__ == "__main__":
    sys.exit(main())
