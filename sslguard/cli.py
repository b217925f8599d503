import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn

from .context import RequestContext, RouteParams
from .exceptions import PolicyConfigurationError
from .config import load_policy
from .guard import SecureRouteGuard
from .logger import configure_logging

EXIT_NO_ACTION = 0
EXIT_CONFIG_ERROR = 2
EXIT_REDIRECT = 3


def find_app_string(file_path: str = "app.py") -> str:
    """
    Formats the file path to Uvicorn convention: 'module:app_object'.

    Assumes that application object is named 'app' inside the file.
    """
    module_name = os.path.basename(file_path).replace(".py", "")
    return f"{module_name}:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sslguard",
        description="Check HTTPS security policies and serve sslguard ASGI applications.",
        epilog="Example: sslguard check --policy policy.json --controller users --action login --host example.com --path /users/login",
    )
    parser.add_argument(
        '--log-format',
        choices=('text', 'json'),
        default='text',
        help='Log output format.'
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARNING', 'ERROR'),
        help='Minimum level of log records to print.'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    # --- Command 'check' ---
    check_parser = subparsers.add_parser(
        'check',
        help='Evaluate a security policy for one request.',
        description='Prints the decision. Exit status 0 means no action, 3 means a redirect.'
    )
    check_parser.add_argument('--policy', required=True, help='Path to the JSON policy file.')
    check_parser.add_argument('--controller', default=None, help='Controller name of the route.')
    check_parser.add_argument('--action', default=None, help='Action name of the route.')
    check_parser.add_argument('--prefix', default=None, help='Routing prefix of the route (e.g. admin).')
    check_parser.add_argument('--secure', action='store_true', help='The request arrived over HTTPS.')
    check_parser.add_argument('--host', default='localhost', help='Host the request was sent to.')
    check_parser.add_argument('--path', default='/', help='Request path.')
    check_parser.add_argument('--query', default='', help='Query string without the leading "?".')

    # --- Commands 'dev' and 'run' ---
    dev_parser = subparsers.add_parser(
        'dev',
        help='Run the application in development mode with auto-reload (Uvicorn).',
        description='Binds to 127.0.0.1 (localhost) and enables auto-reload.'
    )
    run_parser = subparsers.add_parser(
        'run',
        help='Run the application in production mode.',
        description='Binds to 0.0.0.0 (public) and disables auto-reload.'
    )
    for serve_parser in (dev_parser, run_parser):
        serve_parser.add_argument(
            '--app-file',
            type=str,
            default='app.py',
            help='Path to the file containing the App instance (e.g., main.py).'
        )
        serve_parser.add_argument('--port', type=int, default=8000, help='The port to listen on.')

    return parser


def check(args: argparse.Namespace, logger) -> int:
    try:
        policy = load_policy(args.policy)
    except PolicyConfigurationError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR

    params = RouteParams(controller=args.controller, action=args.action, prefix=args.prefix)
    context = RequestContext(
        is_secure=args.secure,
        host=args.host,
        path=args.path,
        query_string=args.query,
    )
    decision = SecureRouteGuard(policy).evaluate(params, context)

    if not decision.is_redirect:
        print("NoAction")
        return EXIT_NO_ACTION

    print(f"{type(decision).__name__} {decision.url}")
    if not policy.auto_redirect:
        logger.info("autoRedirect is off: the middleware would only record this decision")
    return EXIT_REDIRECT


def serve(args: argparse.Namespace, logger) -> int:
    app_file_path = os.path.abspath(args.app_file)
    app_dir = os.path.dirname(app_file_path)

    # The uvicorn subprocess inherits sys.path, so the app module must be importable from here
    if app_dir not in sys.path:
        sys.path.insert(0, app_dir)

    app_string = find_app_string(args.app_file)

    if args.command == 'dev':
        host = '127.0.0.1'
        reload = True
        reload_dirs: Optional[List[str]] = [app_dir]
        log_level = "info"
    else:
        host = '0.0.0.0'
        reload = False
        reload_dirs = None
        log_level = "warning"

    logger.info("Running %s in %s mode on http://%s:%d", app_string, args.command.upper(), host, args.port)

    try:
        uvicorn.run(
            app_string,
            host=host,
            port=args.port,
            reload=reload,
            reload_dirs=reload_dirs,
            log_level=log_level,
            log_config=None
        )
    except Exception:
        logger.exception(
            "The server failed to start or find the application '%s'. "
            "Ensure that the file contains 'app = App()'.",
            args.app_file,
        )
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the sslguard command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(
        level=getattr(logging, args.log_level),
        json_logs=args.log_format == "json",
        environment="cli",
    )

    if args.command == 'check':
        return check(args, logger)
    return serve(args, logger)


if __name__ == '__main__':
    sys.exit(main())
