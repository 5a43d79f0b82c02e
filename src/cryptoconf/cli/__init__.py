"""
cryptoconf CLI - validate crypto toolkit feature configurations.

Commands:
    cryptoconf check     Validate a selection (YAML, config header, -D/-U)
    cryptoconf list      List catalog capabilities and their defaults
    cryptoconf explain   Show one capability and every rule mentioning it
    cryptoconf defaults  Dump the catalog default configuration
"""

import click

from cryptoconf.config import get_config
from cryptoconf.logging_setup import configure_logging

from .check import check
from .browse import defaults, explain, list_capabilities


@click.group()
@click.version_option(package_name="cryptoconf")
def main():
    """cryptoconf - feature configuration validator for crypto toolkits."""
    config = get_config()
    configure_logging(config.log_level, config.log_format)


main.add_command(check)
main.add_command(list_capabilities)
main.add_command(explain)
main.add_command(defaults)


if __name__ == "__main__":
    main()
