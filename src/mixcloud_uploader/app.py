from __future__ import annotations

import argparse
import io
import logging

import requests
from rich.progress import BarColumn, DownloadColumn, Progress, TextColumn, TransferSpeedColumn

from mixcloud_uploader import __version__
from mixcloud_uploader.config import ConfigStore, load_local_env_file, oauth_credentials_from_env
from mixcloud_uploader.errors import ConfigError, InputError, MixcloudUploaderError
from mixcloud_uploader.mixcloud_service import MixcloudService, authorize_url
from mixcloud_uploader.models import Configuration, PremiumOptions, RunContext, UploadResponse
from mixcloud_uploader.prompts import Prompter, split_tags
from mixcloud_uploader.reporting import Terminal, reconcile_response, report_outcome
from mixcloud_uploader.tracklist import parse_tracklist
from mixcloud_uploader.upload import build_multipart_body

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 2

BUILD_NUMBER = __version__
ABOUT_LINES = (
    f"Build Number: {BUILD_NUMBER}",
    "Created by: Greg Tangey (http://ignite.digitalignition.net/)",
    "Website: http://www.rhythmandpoetry.net/",
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mixcloud-uploader",
        description="Upload a cloudcast to Mixcloud",
    )
    parser.add_argument("--about", action="store_true", help="About the application")
    parser.add_argument("--config", action="store_true", help="Configure the application")
    parser.add_argument("--file", help="The mp3 file to upload to mixcloud")
    parser.add_argument("--cover", help="The image file to upload to mixcloud as the cover")
    parser.add_argument("--tracklist", help="A file containing a tracklist for the cloudcast")
    parser.add_argument("--title", help="A title for the cloudcast")
    parser.add_argument("--description", help="A description for the cloudcast")
    parser.add_argument("--tags", help="A comma-separated list of tags to apply to the cloudcast")
    parser.add_argument(
        "--config-dir",
        help="A custom directory to store the mixcloud uploader configuration in (defaults to ~/.mixcloud)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log HTTP and file activity")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def create_configuration(service: MixcloudService, prompter: Prompter, terminal: Terminal) -> Configuration:
    credentials = oauth_credentials_from_env()
    terminal.message("Creating Configuration File...")
    terminal.message(f"Please visit the URL below\n\n{authorize_url(credentials)}\n")

    code = prompter.ask("Enter the provided code: ")
    access_token = service.exchange_code_for_token(code, credentials)
    if not access_token:
        raise ConfigError("Error fetching access token")

    default_tags = prompter.ask("Enter default tags (comma separated): ")
    return Configuration(access_token=access_token, default_tags=default_tags)


def ensure_configuration(
    store: ConfigStore,
    service: MixcloudService,
    prompter: Prompter,
    terminal: Terminal,
    force: bool = False,
) -> Configuration:
    configuration = None if force else store.load()
    if configuration is None:
        configuration = create_configuration(service, prompter, terminal)
        store.save(configuration)
        terminal.success("Configuration saved.")

    if not configuration.access_token:
        raise ConfigError("Access Token configuration missing.")
    return configuration


def resolve_metadata(
    args: argparse.Namespace, configuration: Configuration, prompter: Prompter
) -> tuple[str, str, list[str]]:
    # Any metadata flag switches the interactive questions off.
    if args.title is None and args.description is None and args.tags is None:
        return prompter.basic_input(configuration.default_tags)
    return args.title or "", args.description or "", split_tags(args.tags or "")


def collect_premium(context: RunContext, prompter: Prompter, terminal: Terminal) -> PremiumOptions | None:
    if not context.user.is_pro:
        return None
    terminal.success("\nSetting pro user attributes...")
    return prompter.premium_input()


def submit_upload(service: MixcloudService, body: bytes, content_type: str, terminal: Terminal) -> UploadResponse:
    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(complete_style="green", finished_style="green", style="red"),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=terminal.out,
    )
    with progress:
        reader = progress.wrap_file(io.BytesIO(body), total=len(body), description="Uploading")
        return service.upload(reader, content_type, len(body))


def run(
    args: argparse.Namespace,
    terminal: Terminal,
    prompter: Prompter,
    session: requests.Session | None = None,
) -> int:
    terminal.success(f"Mixcloud CLI Uploader v{__version__}\n")
    if args.about:
        for line in ABOUT_LINES:
            terminal.message(line)
        return EXIT_OK

    store = ConfigStore(args.config_dir)
    store.ensure_dir()
    service = MixcloudService(session=session)
    configuration = ensure_configuration(store, service, prompter, terminal, force=args.config)
    service.access_token = configuration.access_token

    if not args.file:
        raise InputError("You must pass a file to upload, use --file or see --help.\n Exiting.")

    context = RunContext(configuration=configuration, audio_path=args.file, cover_path=args.cover)

    terminal.success("Fetching your user data..")
    context.user = service.fetch_current_user()

    if args.tracklist:
        context.tracklist = parse_tracklist(args.tracklist) or []

    name, description, tags = resolve_metadata(args, configuration, prompter)
    premium = collect_premium(context, prompter, terminal)

    body, content_type = build_multipart_body(
        name,
        description,
        tags,
        context.tracklist,
        context.audio_path,
        cover_path=context.cover_path,
        premium=premium,
        is_pro=context.user.is_pro,
    )
    logger.debug("Prepared %d byte upload body", len(body))

    terminal.message("")
    response = submit_upload(service, body, content_type, terminal)

    outcome = reconcile_response(response)
    return EXIT_OK if report_outcome(outcome, context.tracklist, terminal) else EXIT_FAILURE


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    load_local_env_file()

    terminal = Terminal()
    prompter = Prompter(terminal)
    try:
        return run(args, terminal, prompter)
    except MixcloudUploaderError as exc:
        terminal.error(str(exc))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        terminal.error("Aborted.")
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
