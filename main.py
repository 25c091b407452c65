#!/usr/bin/env python3
"""
Article Briefing Script

This script serves the article briefing pipeline over HTTP: each request picks
a fresh headline, summarizes the article, narrates the summary and returns a
short quiz about it. Run with --once to process a single article and print the
result as JSON instead of starting the server.

The built-in server is Django's development runserver. In production, serve
the WSGI application with a real server instead:

    gunicorn server:application
"""

import json
import logging
import sys

from config import PORT, PipelineConfig
from errors import PipelineError
from pipeline import build_pipeline
from utils.logging_setup import setup_logging

def run_once() -> int:
    """Runs one pipeline and prints the result. Returns the process exit code."""
    config = PipelineConfig.from_env()
    try:
        result = build_pipeline(config).run()
    except PipelineError as e:
        logging.error(f"Pipeline failed: {e.message}")
        print(json.dumps({"error": e.message}))
        return 1
    print(json.dumps(result.model_dump(by_alias=True), indent=2))
    return 0

def serve():
    """Starts the Django development server on the configured port."""
    from django.core.management import execute_from_command_line
    import server  # noqa: F401  configures Django settings

    logging.info(f"Server running on port {PORT}")
    execute_from_command_line([sys.argv[0], "runserver", f"0.0.0.0:{PORT}", "--noreload"])

def main():
    """Main function to run the article briefing service."""
    # Check for the --once flag
    run_single = "--once" in sys.argv

    # Set up logging
    setup_logging()

    if run_single:
        sys.exit(run_once())
    serve()

if __name__ == "__main__":
    main()
