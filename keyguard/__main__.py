import logging
from typing import Optional

import click
import uvicorn
from dotenv import load_dotenv

from keyguard.config.provider import EnvConfigProvider, FileConfigProvider
from keyguard.logging_config import configure_logging, get_logging_config
from keyguard.main import create_app_from_provider

load_dotenv()


@click.command()
@click.option("--config", "config_path", default=None, help="YAML or JSON configuration file")
@click.option("--host", "host", default=None, help="Bind address (overrides configuration)")
@click.option("--port", "port", default=None, type=int, help="Bind port (overrides configuration)")
def main(config_path: Optional[str], host: Optional[str], port: Optional[int]):
    """Run the KeyGuard key distribution server."""
    try:
        config_provider = FileConfigProvider(config_path) if config_path else EnvConfigProvider()
        api_config = config_provider.get_api_config()
        configure_logging(api_config.log_level)
        app = create_app_from_provider(config_provider)
    except ValueError as e:
        logging.getLogger("keyguard").error(f"Invalid configuration: {e}")
        raise click.ClickException(str(e))

    uvicorn.run(
        app,
        host=host if host is not None else api_config.host,
        port=port if port is not None else api_config.port,
        log_level=api_config.log_level.lower(),
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
