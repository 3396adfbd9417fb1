import logging
import signal
from typing import Optional

from app_config import (
    AppConfig,
    AppConfigurationError,
    default_app_config,
    load_app_config,
    resolve_config_path,
)
from notifier import NotifierConfig, NotifierConfigurationError, build_notifier
from pomodoro import SIGNAL_SKIP_BREAK
from runtime import (
    ExternalSignalEvent,
    QueueEventPublisher,
    RuntimeBootstrap,
    RuntimeEngine,
    RuntimeHooks,
    ShutdownEvent,
)
from runtime.ui import RuntimeUIPublisher
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro_app")


def setup_signal_handlers(publisher: QueueEventPublisher) -> None:
    """Route SIGINT/SIGTERM to shutdown and SIGUSR1 to the SKIP_BREAK signal."""

    def shutdown_handler(signum: int, frame) -> None:
        del frame
        publisher.publish(ShutdownEvent(reason=signal.Signals(signum).name))

    def skip_break_handler(signum: int, frame) -> None:
        del signum, frame
        publisher.publish(ExternalSignalEvent(name=SIGNAL_SKIP_BREAK))

    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)
    if hasattr(signal, "SIGUSR1"):
        signal.signal(signal.SIGUSR1, skip_break_handler)


def _load_config(logger: logging.Logger) -> AppConfig:
    config_path = resolve_config_path()
    if not config_path.exists():
        logger.info("No config file at %s; using built-in defaults", config_path)
        return default_app_config()
    app_config = load_app_config(str(config_path))
    logger.info("Loaded runtime config: %s", config_path)
    return app_config


def main() -> int:
    """Run the pomodoro phase timer with its web UI."""
    logger = setup_logging(level=logging.INFO)

    try:
        app_config = _load_config(logger)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(app_config.runtime.log_level)

    try:
        ui_config = UIServerConfig.from_settings(app_config.ui_server)
        notifier_config = NotifierConfig.from_settings(app_config.notifier)
    except (ServerConfigurationError, NotifierConfigurationError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    ui_server: Optional[UIServer] = None
    if ui_config.enabled:
        ui_server = UIServer(config=ui_config, logger=logging.getLogger("ui_server"))
    else:
        logger.info("UI server disabled via ui_server.enabled=false")

    notifier = build_notifier(
        notifier_config,
        RuntimeUIPublisher(ui_server),
        logger=logging.getLogger("notifier"),
    )

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logger,
            app_config=app_config,
            notifier=notifier,
            ui_server=ui_server,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
        )
    )
    if ui_server is not None:
        # Handler must be set before start; frames arriving earlier are dropped.
        ui_server.set_client_message_handler(engine.publisher.publish_client_message)
        try:
            ui_server.start()
        except RuntimeError as error:
            logger.error("UI server startup error: %s", error)
            return 1

    return engine.run()


if __name__ == "__main__":
    raise SystemExit(main())
