import logging
import sys
from datetime import datetime

from flask import Flask, request, session
from flask_babel import Babel, format_date
from flask_socketio import SocketIO
from gevent.pywsgi import WSGIServer

from eventplanner.config import Config, ConfigType
from eventplanner.constants import LANGUAGES, NOT_AVAILABLE
from eventplanner.lib.args import parse_eventplanner_args
from eventplanner.lib.logger import configure_logger, get_log_directory
from eventplanner.lib.store import StoreLoadError
from eventplanner.planner import EventPlanner
from eventplanner.routes.api import api_bp
from eventplanner.routes.events import events_bp
from eventplanner.routes.home import home_bp
from eventplanner.routes.registration import registration_bp

socketio = SocketIO()
babel = Babel()


def get_locale():
    """Select the language to display the webpage in"""
    # Check URL arguments
    if request.args.get("lang") in LANGUAGES:
        session["lang"] = request.args.get("lang")
    if session.get("lang") in LANGUAGES:
        return session["lang"]
    # Use browser header
    return request.accept_languages.best_match(LANGUAGES.keys())


def display_date(value):
    """Jinja filter: locale-formatted date, passing placeholders through."""
    if value is None or value == NOT_AVAILABLE:
        return NOT_AVAILABLE
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return format_date(value)


def create_app(planner: EventPlanner, config: type[Config] = ConfigType.PRODUCTION.value) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config)
    app.jinja_env.add_extension("jinja2.ext.i18n")

    # Register blueprints for additional routes
    app.register_blueprint(home_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(registration_bp)
    app.register_blueprint(api_bp)

    babel.init_app(app, locale_selector=get_locale)
    socketio.init_app(app, async_mode="gevent")

    app.jinja_env.filters["display_date"] = display_date

    # expose the planner session to the routes
    app.planner = planner
    if planner.socketio is None:
        planner.socketio = socketio
    return app


def main():
    args = parse_eventplanner_args()

    log_file = configure_logger(
        log_level=args.log_level,
        log_dir=get_log_directory(args.data_dir),
        max_log_files=args.max_log_files,
    )
    logging.debug(f"Logging to {log_file}")

    try:
        planner = EventPlanner(
            data_dir=args.data_dir,
            storage_file=args.storage_file,
            strict_load=args.strict_load,
        )
    except StoreLoadError as e:
        logging.error(f"Could not load stored data: {e}")
        sys.exit(1)

    config = ConfigType.DEVELOPMENT.value if args.debug else ConfigType.PRODUCTION.value
    app = create_app(planner, config)

    server = WSGIServer(
        (args.host, int(args.port)), app, log=None, error_log=logging.getLogger()
    )
    logging.info(f"Event Planner running at http://{args.host}:{args.port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logging.info("Shutting down")
        server.stop()
    sys.exit()


if __name__ == "__main__":
    main()
