"""Main entry point for the dohjson forwarding server."""
import sys
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


def create_handler(config):
    """Create the resolution handler.

    Args:
        config: Application configuration

    Returns:
        Forwarder relaying questions to the configured upstream
    """
    from dohjson.services.doh_client import DoHClient
    from dohjson.services.forwarder import Forwarder

    logger.info(f"Forwarding questions to {config.upstream} (timeout {config.timeout}s)")

    client = DoHClient(
        addr=config.upstream,
        timeout=config.timeout,
        allow_http=config.allow_http,
    )
    return Forwarder(client)


def main():
    """Main entry point."""
    from dohjson.config import Config, ConfigurationError
    from dohjson.api.app import create_app

    logger.info("Starting dohjson server")

    # Load configuration
    try:
        config = Config.from_env()
        logger.info("Configuration loaded successfully")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(2)

    app = create_app(config=config, handler=create_handler(config))

    # Run Flask app
    logger.info(f"Starting web server on {config.host}:{config.port}")
    try:
        app.run(host=config.host, port=config.port, debug=config.debug)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        logger.info("Shutdown complete")


if __name__ == '__main__':
    main()
