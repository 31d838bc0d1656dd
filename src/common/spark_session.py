"""
Shared SparkSession utilities for the census job.

The worker pool is Spark's task pool: with the default ``local[*]`` master
each mapper task runs in its own executor thread on this machine.

Logging is configured via conf/log4j2.properties to:
- Write INFO logs to .logs/spark.log
- Only show ERROR on console (stdout is reserved for the census report)
"""

import os
from pathlib import Path

from pyspark.sql import SparkSession

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Path to log4j2 config
LOG4J2_CONFIG = PROJECT_ROOT / "conf" / "log4j2.properties"

# Final app name will be: APP_NAME_PREFIX-<script_name>
APP_NAME_PREFIX = "DnaCensus"


def _ensure_logs_dir() -> None:
    """Ensure .logs directory exists."""
    logs_dir = PROJECT_ROOT / ".logs"
    logs_dir.mkdir(exist_ok=True)


def _snake_to_title(snake_str: str) -> str:
    """
    Convert snake_case string to TitleCase.

    Examples:
        census_job -> CensusJob
        sequence_parser -> SequenceParser
    """
    return "".join(word.capitalize() for word in snake_str.split("_"))


def _parse_script_identifier(script_id: str | None) -> str | None:
    """
    Parse a script identifier, which can be either a file path or a name.

    If it looks like a file path (contains / or ends with .py), extract
    the filename and convert from snake_case to TitleCase.
    """
    if script_id is None:
        return None

    if "/" in script_id or script_id.endswith(".py"):
        return _snake_to_title(Path(script_id).stem)

    return script_id


def _build_app_name(script_name: str | None = None) -> str:
    """Build the full application name, e.g. "DnaCensus-CensusJob"."""
    if script_name:
        return f"{APP_NAME_PREFIX}-{script_name}"
    return APP_NAME_PREFIX


def create_spark_session(
    script_name: str | None = None,
    master: str = "local[*]",
) -> SparkSession:
    """
    Create a SparkSession with the census job's configuration.

    Logging is configured to write detailed logs to .logs/spark.log
    while only showing errors on the console.

    Args:
        script_name: Identifier for this script. Can be either:
                     - A file path like __file__ (auto-converts snake_case to TitleCase)
                     - A direct name like "CensusJob"
        master: Spark master URL (default: local[*], one worker thread per core)

    Returns:
        Configured SparkSession instance
    """
    _ensure_logs_dir()

    app_name = _build_app_name(_parse_script_identifier(script_name))

    # log4j resolves the relative .logs/ path against the working directory
    original_cwd = os.getcwd()
    os.chdir(PROJECT_ROOT)

    try:
        builder = SparkSession.builder.appName(app_name).master(master)

        if LOG4J2_CONFIG.exists():
            builder = builder.config(
                "spark.driver.extraJavaOptions",
                f"-Dlog4j.configurationFile=file:{LOG4J2_CONFIG}",
            )

        spark = (
            builder.config("spark.driver.memory", "2g")
            .config("spark.ui.showConsoleProgress", "false")
            .getOrCreate()
        )

        spark.sparkContext.setLogLevel("ERROR")

        return spark
    finally:
        os.chdir(original_cwd)


def get_logger(spark: SparkSession, name: str):
    """
    Return the JVM log4j2 logger called ``name``.

    Messages logged through it follow conf/log4j2.properties, so driver
    diagnostics end up in .logs/spark.log next to Spark's own output.
    The threshold is taken from the log4j2 config rather than from
    ``setLogLevel``, which only adjusts the root logger.
    """
    jvm = spark.sparkContext._jvm  # type: ignore[attr-defined]
    return jvm.org.apache.logging.log4j.LogManager.getLogger(name)
