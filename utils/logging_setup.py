"""
Logging configuration for the Article Briefing application.

This module sets up logging for the application, including console and file handlers.
"""

import logging
from config import LOG_FILE, PROMPT_LOG_FILE

PROMPT_LOGGER_NAME = 'prompts'

def setup_logging(log_file: str = LOG_FILE, prompt_log_file: str = PROMPT_LOG_FILE, level: int = logging.INFO):
    """
    Configure logging to log to both console and file.

    Args:
        log_file: Path of the main application log
        prompt_log_file: Path of the log that receives LLM prompts and responses
        level: Logging level for the root logger

    Returns:
        tuple: A tuple containing (main_logger, prompt_logger)
    """
    # Configure main logger
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(threadName)s]: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file, encoding='utf-8')
        ]
    )

    # Create a custom logger for prompts and responses
    prompt_logger = logging.getLogger(PROMPT_LOGGER_NAME)
    prompt_logger.setLevel(logging.INFO)

    # Create a separate log file for prompts and LLM outputs
    if not prompt_logger.handlers:
        prompt_file_handler = logging.FileHandler(prompt_log_file, encoding='utf-8')
        prompt_file_handler.setFormatter(logging.Formatter('%(asctime)s\n%(message)s\n'))
        prompt_logger.addHandler(prompt_file_handler)

    # Prevent prompt logs from propagating to the root logger
    prompt_logger.propagate = False

    return logging.getLogger(), prompt_logger

def log_stage_prompt(prompt_logger, stage_title, prompt):
    """
    Log a stage prompt to the prompt logger.

    Args:
        prompt_logger: The prompt logger instance
        stage_title: The name of the pipeline stage
        prompt: The user prompt sent to the model
    """
    prompt_logger.info(
        f"\n{'='*80}\nPROMPT FOR {stage_title}\n{'='*80}\n"
        f"USER: {prompt}\n{'='*80}\n"
    )

def log_stage_response(prompt_logger, stage_title, response):
    """
    Log a stage response to the prompt logger.

    Args:
        prompt_logger: The prompt logger instance
        stage_title: The name of the pipeline stage
        response: The response content
    """
    prompt_logger.info(
        f"\n{'='*80}\nRESPONSE FOR {stage_title}\n{'='*80}\n"
        f"{response}\n{'='*80}\n"
    )
