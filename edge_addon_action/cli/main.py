import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import ContextManager, List, Optional, Union

import click
import sentry_sdk
from dotenv import find_dotenv, load_dotenv

from .. import __version__
from .._publish import (
    PHASE_PUBLISH,
    PHASE_UPLOAD,
    SubmissionOrchestrator,
    SubmissionResult,
)
from ..console import print_banner, print_final_failure, print_final_success, print_summary_table, step
from ..exceptions import (
    APIError,
    ConfigurationError,
    EdgeAddonError,
    OperationFailedError,
)
from ..logging_config import logger, set_log_level
from ..publish import create_credential_provider

EDGE_ADDON_VERSION = __version__

"""

A submission has two phases, each backed by a long-running
operation on the Edge Add-ons side.

# Step 1: Upload
The zip package is uploaded as the new draft. The store
validates it asynchronously; we poll the validation
operation until it reports Succeeded.

# Step 2: Publish
The draft is submitted for certification review together
with the reviewer notes. Again we poll until the publish
operation reports Succeeded.

Publish is never attempted unless upload succeeded, and any
failure aborts the run with exit code 1.

# Configuration
Every option falls back to an environment variable, and a
.env file in the working directory is loaded first:
- ACCESS_TOKEN_URL, CLIENT_ID, CLIENT_SECRET (client credentials)
- API_KEY, CLIENT_ID (API key)
- PRODUCT_ID, NOTES, ZIP_FILE

"""

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class PublishConfig:
    """Configuration settings for one submission run."""

    product_id: str
    archive: Optional[Union[str, bytes]] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    access_token_url: Optional[str] = None
    api_key: Optional[str] = None
    notes: str = ""
    telemetry: bool = True
    unresolved_archive: Optional[str] = None

    @property
    def auth_scheme(self) -> str:
        return "api-key" if self.api_key else "client-credentials"

    def missing_fields(self) -> List[str]:
        """Names of required settings that are not set."""
        missing = []
        if not self.api_key and not self.access_token_url:
            missing.append("ACCESS_TOKEN_URL")
        if not self.client_id:
            missing.append("CLIENT_ID")
        if not self.api_key and not self.client_secret:
            missing.append("CLIENT_SECRET")
        if not self.product_id:
            missing.append("PRODUCT_ID")
        if not self.archive:
            missing.append("ZIP_FILE")
        return missing

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        missing = self.missing_fields()
        for name in missing:
            if name == "ZIP_FILE" and self.unresolved_archive:
                logger.error(f"ZIP_FILE not found: {self.unresolved_archive}")
            else:
                logger.error(f"{name} is required!")
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

        if self.api_key:
            if self.access_token_url or self.client_secret:
                logger.warning("API_KEY is set; ignoring ACCESS_TOKEN_URL and CLIENT_SECRET")
        else:
            self._validate_token_url()

    def _validate_token_url(self) -> None:
        from urllib.parse import urlparse

        parsed = urlparse(self.access_token_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError("ACCESS_TOKEN_URL must be an http:// or https:// URL")
        if parsed.scheme == "http":
            logger.warning("Using HTTP (not HTTPS) for the token endpoint - client secret is sent in clear text")


def path_expansion(path: str) -> str:
    """
    Takes a path/file and returns an absolute path.
    This function is needed to handle GitHub Action's
    somewhat custom path management inside Docker.

    Args:
        path: Input path to expand

    Returns:
        Absolute path string

    Raises:
        ConfigurationError: If file is not found
    """
    current_dir = Path.cwd()
    relative_path = current_dir / path
    workspace_relative_path = Path("/github/workspace") / path

    if Path(path).is_file():
        logger.info(f"Using archive '{path}'.")
        return str(Path(path).resolve())
    elif relative_path.is_file():
        logger.info(f"Using archive '{relative_path}'.")
        return str(relative_path)
    elif workspace_relative_path.is_file():
        logger.info(f"Using archive '{workspace_relative_path}'.")
        return str(workspace_relative_path)
    else:
        raise ConfigurationError(f"Archive file not found: {path}")


def evaluate_boolean(value: str) -> bool:
    """Interpret an environment-variable style boolean."""
    return value.lower() in ["true", "yes", "yeah", "1", "on"]


def build_config(
    zip_file: Optional[str] = None,
    product_id: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    access_token_url: Optional[str] = None,
    api_key: Optional[str] = None,
    notes: Optional[str] = None,
    telemetry: bool = True,
) -> PublishConfig:
    """
    Build a PublishConfig from already-parsed CLI values.

    The archive path is expanded but the config is not validated; call
    ``validate()`` before use. A path that does not resolve to a file
    leaves ``archive`` unset and is kept in ``unresolved_archive`` so that
    ``validate()`` reports it along with every other missing setting.
    """
    archive = None
    unresolved_archive = None
    if zip_file:
        try:
            archive = path_expansion(zip_file)
        except ConfigurationError as e:
            logger.debug(str(e))
            unresolved_archive = zip_file

    return PublishConfig(
        product_id=product_id or "",
        archive=archive,
        unresolved_archive=unresolved_archive,
        client_id=client_id,
        client_secret=client_secret,
        access_token_url=access_token_url,
        api_key=api_key,
        notes=notes or "",
        telemetry=telemetry,
    )


def initialize_sentry() -> None:
    """Initialize Sentry for error tracking when SENTRY_DSN is configured."""
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        return

    def before_send(event, hint):
        """
        Filter events before sending to Sentry.
        Configuration mistakes and store-side rejections are user errors.
        """
        if "exc_info" in hint:
            exc_type, exc_value, tb = hint["exc_info"]
            if isinstance(exc_value, (ConfigurationError, OperationFailedError)):
                return None
        return event

    sentry_sdk.init(
        dsn=sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=0.0,
        before_send=before_send,
    )


PHASE_STEPS = {
    PHASE_UPLOAD: (1, "Upload package"),
    PHASE_PUBLISH: (2, "Publish submission"),
}


def phase_step(phase: str) -> ContextManager[None]:
    """Console step wrapping one submission phase."""
    step_num, title = PHASE_STEPS[phase]
    return step(step_num, title)


def run_pipeline(config: PublishConfig) -> SubmissionResult:
    """
    Upload and publish the configured archive.

    Raises:
        EdgeAddonError: Any failure, which aborts the run
    """
    credentials = create_credential_provider(
        client_id=config.client_id,
        access_token_url=config.access_token_url,
        client_secret=config.client_secret,
        api_key=config.api_key,
    )
    logger.info(f"Authenticating with {credentials.name}")

    orchestrator = SubmissionOrchestrator(
        product_id=config.product_id,
        credentials=credentials,
    )
    result = orchestrator.run(config.archive, config.notes, phase_context=phase_step)

    print_summary_table(
        "Submission",
        [
            ("Product", result.product_id),
            ("Upload operation", result.upload_operation_id),
            ("Publish operation", result.publish_operation_id),
        ],
    )
    return result


def _describe_failure(error: EdgeAddonError) -> str:
    if isinstance(error, OperationFailedError):
        return f"{error} {error.operation.raw}"
    if isinstance(error, APIError) and error.body:
        return f"{error} {error.body}"
    return str(error)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("zip_file", required=False, envvar="ZIP_FILE")
@click.option("--access-token-url", envvar="ACCESS_TOKEN_URL", help="OAuth2 token endpoint. [env: ACCESS_TOKEN_URL]")
@click.option("--client-id", envvar="CLIENT_ID", help="API client id. [env: CLIENT_ID]")
@click.option("--client-secret", envvar="CLIENT_SECRET", help="API client secret. [env: CLIENT_SECRET]")
@click.option(
    "--api-key", envvar="API_KEY", help="API key, used instead of client credentials when set. [env: API_KEY]"
)
@click.option("--product-id", envvar="PRODUCT_ID", help="Edge Add-ons product id. [env: PRODUCT_ID]")
@click.option("--notes", envvar="NOTES", default="", help="Notes for reviewers. [env: NOTES]")
@click.option(
    "--telemetry/--no-telemetry",
    default=lambda: evaluate_boolean(os.getenv("TELEMETRY", "true")),
    help="Report unexpected errors to Sentry when SENTRY_DSN is set. [env: TELEMETRY]",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(EDGE_ADDON_VERSION, "--version", prog_name="Edge Add-on Action", message="%(prog)s %(version)s")
@click.pass_context
def cli(
    ctx: click.Context,
    zip_file: Optional[str],
    access_token_url: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    api_key: Optional[str],
    product_id: Optional[str],
    notes: str,
    telemetry: bool,
    verbose: bool,
) -> None:
    """Upload ZIP_FILE to Microsoft Edge Add-ons and publish it."""
    print_banner(EDGE_ADDON_VERSION)

    if verbose:
        set_log_level("DEBUG")

    if telemetry:
        initialize_sentry()

    try:
        config = build_config(
            zip_file=zip_file,
            product_id=product_id,
            client_id=client_id,
            client_secret=client_secret,
            access_token_url=access_token_url,
            api_key=api_key,
            notes=notes,
            telemetry=telemetry,
        )
        config.validate()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        click.echo(ctx.get_help(), err=True)
        sys.exit(1)

    try:
        run_pipeline(config)
    except EdgeAddonError as e:
        if config.telemetry:
            sentry_sdk.capture_exception(e)
        print_final_failure(_describe_failure(e))
        sys.exit(1)

    print_final_success()


def main() -> None:
    """Main entry point for the edge-addon-action."""
    load_dotenv(find_dotenv(usecwd=True))
    cli()


if __name__ == "__main__":
    main()
