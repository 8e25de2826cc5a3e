"""Main entry point for the suffixpy package."""

from loguru import logger

from suffixpy.cli import create_parser
from suffixpy.core import load_config
from suffixpy.processing import run_search
from suffixpy.utils import Constants, add_log_file_handler, setup_logger


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config, args, parser)
    except ValueError as e:
        parser.error(str(e))

    # Setup logging
    setup_logger(verbose=config.verbose, debug=config.debug)
    if config.log_file:
        add_log_file_handler(config.log_file, verbose=config.verbose, debug=config.debug)

    # Print startup banner
    if config.verbose:
        logger.info("=" * Constants.BANNER_WIDTH)
        logger.info("SuffixPy - Suffix Tree Pattern Search")
        logger.info("=" * Constants.BANNER_WIDTH)
        logger.info("")

    # Validate
    if not config.text:
        parser.error("Must specify --text")

    # Print configuration summary
    if config.verbose:
        logger.info("Configuration:")
        logger.info(f"  Text file: {config.text}")
        if config.patterns:
            logger.info(f"  Pattern file: {config.patterns}")
        if config.pattern:
            logger.info(f"  Inline patterns: {len(config.pattern)}")
        logger.info(f"  Mode: {config.mode}")
        if config.mode in ("approximate", "parallel"):
            logger.info(f"  Max errors: {config.max_errors}")
        if config.mode == "parallel":
            logger.info(f"  Workers: {config.jobs}")
        logger.info("")

    # Run pipeline
    try:
        run_search(config)
        if config.verbose:
            logger.info("")
            logger.info("=" * Constants.BANNER_WIDTH)
            logger.info("✓ Search completed successfully")
            logger.info("=" * Constants.BANNER_WIDTH)
    except KeyboardInterrupt:
        logger.warning("")
        logger.warning("⚠️  Search interrupted by user")
        raise
    except Exception:
        if config.verbose:
            logger.error("")
            logger.error("=" * Constants.BANNER_WIDTH)
            logger.error("✗ Search failed")
            logger.error("=" * Constants.BANNER_WIDTH)
        raise


if __name__ == "__main__":
    main()
