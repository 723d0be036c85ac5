"""Application factory wiring Flask extensions, auth services and blueprints."""

from __future__ import annotations

from flask import Flask

from hobbyconnect.core.config import CONFIG_MAP, BaseConfig, get_config
from hobbyconnect.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config class/object, a ``CONFIG_MAP`` key, or ``None`` to
        select by ``APP_ENV``.
    :raises ConfigurationError: If the token secret or the credential store
        is misconfigured.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    if isinstance(config, str):
        config = CONFIG_MAP[config]
    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from hobbyconnect.core import proxy

    proxy.init_app(app)

    from hobbyconnect.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from hobbyconnect.core import cors

    cors.init_app(app)

    from hobbyconnect.core import auth

    auth.init_app(app)

    from hobbyconnect.api import init_app as init_api

    init_api(app)

    from hobbyconnect.core import errors

    errors.init_app(app)

    return app
