# logger_setup.py

import logging
import os
import json

LOGGER_NAME = "fireworks"


def load_config(config_path='config.json'):
    """Loads the JSON configuration file, logging and re-raising on failure."""
    logger = logging.getLogger(LOGGER_NAME)
    try:
        with open(config_path, 'r') as f:
            return json.load(f)
    except FileNotFoundError:
        logger.error(f"Configuration file not found at {config_path}.")
        raise
    except json.JSONDecodeError:
        logger.error(f"Error decoding JSON from {config_path}.")
        raise


def _replace_handlers(logger, handlers, formatter):
    """Closes and drops the logger's current handlers, then installs `handlers`."""
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def setup_logging(config: dict, log_root='runs'):
    """
    Sets up logging for the application from an already loaded config.

    Creates a run-specific log directory and points the dedicated "fireworks"
    logger (not the root logger) at that directory and the console, so pygame
    and Numba chatter stays out of the run log. Safe to call more than once.

    Data Contract:
    - Inputs:
        - config (dict) - The parsed config.json; needs 'run_id' and a
          'logging' section with 'level' and 'format'.
        - log_root (str) - Directory under which run directories are created.
    - Outputs: The path of the log file (str).
    - Side Effects: Configures the "fireworks" logger and creates the run directory.
    """
    run_id = config['run_id']
    log_config = config['logging']

    log_dir = os.path.join(log_root, run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'fireworks.log')

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_config['level'])
    logger.propagate = False
    _replace_handlers(
        logger,
        [logging.FileHandler(log_file), logging.StreamHandler()],
        logging.Formatter(log_config['format'])
    )

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return log_file
