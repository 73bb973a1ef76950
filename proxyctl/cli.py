import typer
import logging
import sys

from proxyctl.commands import CONTEXT_SETTINGS, proxy_config
from proxyctl.logging import setup_logging

app = typer.Typer(help="Inspect the Envoy sidecar configuration of Kubernetes pods.")

# Global debug flag
debug_mode = False

app.command("proxy-config", context_settings=CONTEXT_SETTINGS)(proxy_config)

# Global options callback
@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """proxyctl - Service mesh proxy inspection CLI."""
    global debug_mode
    debug_mode = debug
    setup_logging(debug)
    if debug:
        logging.debug("Debug mode enabled")

if __name__ == "__main__":
    try:
        app()
    except Exception as e:
        if debug_mode:
            import traceback
            logging.error(f"Unhandled exception: {e}\n{traceback.format_exc()}")
        else:
            logging.error(f"Error: {e}")
        sys.exit(1)
