#!/usr/bin/env python3
"""Arc-length report: build parameterizations for a curves file.

For every named curve:
    1. Convert the validated spec into a curve
    2. Build its arc-length parameterization (strategy from the build config)
    3. Record total length and tree shape

Report format (YAML):
    <name>:
      kind: bezier
      length: 131.0421...
      leaf_count: 64
      height: 6

CLI:
    python scripts/arc_length_report.py --curves configs/curves.example.yaml
    python scripts/arc_length_report.py --curves curves.yaml \\
                                        --config configs/arc_length.v1.yaml \\
                                        --out outputs/lengths.yaml --log-level DEBUG
"""

import argparse
import logging
import sys
from typing import Any, Dict, Optional

from src.arc_length import arc_length, tree_stats
from src.curves import curve_from_spec, parameterize
from src.utils import fs, validators
from src.utils.logging_config import install_excepthook, log_context, setup_logging, shutdown

logger = logging.getLogger(__name__)


def report_main(
    curves_path: str,
    config_path: Optional[str] = None,
    output_path: Optional[str] = None,
) -> Dict[str, Dict[str, Any]]:
    """Build every curve in ``curves_path`` and summarise the trees.

    Parameters
    ----------
    curves_path : str
        curves.v1 YAML file
    config_path : str, optional
        arc_length.v1 YAML file; defaults to BuildConfig() when omitted
    output_path : str, optional
        Where to write the YAML report; nothing is written when omitted

    Returns
    -------
    dict
        ``{name: {kind, length, leaf_count, height}}`` in file order
    """
    curves_file = validators.load_curves_file(curves_path)
    if config_path is not None:
        config = validators.load_build_config(config_path)
    else:
        config = validators.BuildConfig()

    logger.info(
        "Building %d curve(s): strategy=%s tolerance=%g",
        len(curves_file.curves), config.strategy, config.tolerance
    )

    report: Dict[str, Dict[str, Any]] = {}
    for entry in curves_file.curves:
        with log_context(curve=entry.name):
            parameterization = parameterize(curve_from_spec(entry.curve), config)
            stats = tree_stats(parameterization.root)
            report[entry.name] = {
                'kind': entry.curve.kind,
                'length': arc_length(parameterization),
                'leaf_count': stats.leaf_count,
                'height': stats.height,
            }
            logger.info(
                "length=%.9g leaves=%d height=%d",
                report[entry.name]['length'], stats.leaf_count, stats.height
            )

    if output_path is not None:
        fs.atomic_yaml_dump(report, output_path)
        logger.info("Report written to %s", output_path)

    return report


def main() -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Report arc lengths and tree sizes for a curves file"
    )
    parser.add_argument(
        "--curves",
        type=str,
        required=True,
        help="Path to curves file (curves.v1 YAML)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to build config (arc_length.v1 YAML)",
    )
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Write the report to this YAML file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    args = parser.parse_args()

    setup_logging(log_level=args.log_level, context={"app": "report"})
    install_excepthook()

    try:
        report = report_main(args.curves, args.config, args.out)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1
    finally:
        shutdown()

    for name, row in report.items():
        print(f"{name:24s} {row['kind']:8s} {row['length']:.9g}  ({row['leaf_count']} leaves)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
