"""
Command-line interface for the XML to JSON conversion system.

Converts an XML file (or the built-in sample response when no input is given)
and prints the JSON or writes it to a file.
"""

import sys
import logging
import argparse

from pathlib import Path
from typing import Optional

from .config.config_manager import ConfigManager
from .config.converter_defaults import ConverterDefaults
from .exceptions import ConverterError
from .service import XmlToJsonService
from .converter import XmlToJsonConverter


SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Response>
<ResultBlock>
<ErrorWarnings>
<Errors errorCount="0" />
<Warnings warningCount="1">
<Warning>
<Number>102001</Number>
<Message>Minor mismatch in address</Message>
<Values>
<Value>Bellandur</Value>
<Value>Bangalore</Value>
</Values>
</Warning>
</Warnings>
</ErrorWarnings>
<MatchDetails>
<Match>
<Entity>John</Entity>
<MatchType>Exact</MatchType>
<Score>35</Score>
</Match>
<Match>
<Entity>Doe</Entity>
<MatchType>Exact</MatchType>
<Score>50</Score>
</Match>
</MatchDetails>
<API>
<RetStatus>SUCCESS</RetStatus>
<ErrorMessage />
<SysErrorCode />
<SysErrorMessage />
</API>
</ResultBlock>
</Response>"""


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Convert response XML documents to JSON")
    parser.add_argument("--input", help="XML file to convert (defaults to the built-in sample response)")
    parser.add_argument("--output", help="Write JSON to this file instead of stdout")
    parser.add_argument("--config", help="Settings file (.properties or .yaml); "
                                         f"defaults to ${ConverterDefaults.CONFIG_PATH_ENV_VAR} "
                                         f"or {ConverterDefaults.DEFAULT_CONFIG_FILE}")
    parser.add_argument("--log-level", default=ConverterDefaults.LOG_LEVEL,
                        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                        help=f"Logging level (default: {ConverterDefaults.LOG_LEVEL})")
    return parser.parse_args(argv)


def main(args: Optional[list] = None) -> int:
    """
    Main entry point for the CLI application.

    Args:
        args: Optional command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    options = parse_args(sys.argv[1:] if args is None else args)

    # Set up logging without reconfiguring root if already configured
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, options.log_level))
    logger = logging.getLogger(__name__)

    logger.info("Starting XML to JSON conversion application")
    if logger.isEnabledFor(logging.DEBUG):
        ConverterDefaults.log_summary(logger)

    try:
        settings = ConfigManager().load_settings(options.config)
        service = XmlToJsonService(converter=XmlToJsonConverter(settings))

        if options.input:
            xml_input = Path(options.input).read_text(encoding="utf-8")
        else:
            xml_input = SAMPLE_XML

        json_output = service.process_xml(xml_input)
    except (ConverterError, OSError) as e:
        logger.error(f"Error in XML to JSON conversion: {e}")
        print(f"Error converting XML to JSON: {e}", file=sys.stderr)
        return 1

    if options.output:
        output_path = Path(options.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_output, encoding="utf-8")
        logger.info(f"Wrote JSON output to {output_path}")
    else:
        print("\n--- Converted JSON Output ---")
        print(json_output)

    logger.info("Conversion completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
