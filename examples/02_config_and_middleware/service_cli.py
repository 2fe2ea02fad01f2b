#!/usr/bin/env python3
"""
CLI with layered configuration and middleware.

Configuration comes from defaults, SERVICE_* environment variables and the
first of ./service.yaml or ./service.json that exists.

Try:
    python service_cli.py status
    SERVICE_SERVER_PORT=9000 python service_cli.py status
    python service_cli.py status --token secret
"""

import pathlib
import sys

# Add the project root to the path
project_root = str(pathlib.Path(__file__).resolve().parents[2])
sys.path.append(project_root) if project_root not in sys.path else None

from pydantic import BaseModel

from cmdinfra import LoggingMiddleware, create_cli, create_middleware_builder


class Server(BaseModel):
    host: str = "localhost"
    port: int = 8080


class ServiceConfig(BaseModel):
    server: Server = Server()
    debug: bool = False


class StatusInput(BaseModel):
    token: str | None = None


def status(parsed_input: StatusInput, context, config: ServiceConfig) -> dict:
    """Show where the service would listen."""
    who = context.get("user", "anonymous")
    print(f"{config.server.host}:{config.server.port} (as {who})")
    return {"host": config.server.host, "port": config.server.port}


auth = (
    create_middleware_builder("auth")
    .when(lambda inp, ctx, meta: getattr(inp, "token", None))
    .before(lambda inp, ctx: {"user": "admin"})
    .build()
)


def create_application():
    """Create the CLI with configuration and middleware."""
    cli = create_cli("service", "0.2.0", "Service control", debug=True)
    cli.configure(
        schema=ServiceConfig,
        config_files=["service.yaml", "service.json"],
        env_prefix="SERVICE_",
    )
    cli.use(LoggingMiddleware()).use(auth)

    cli.add("status", "Show service status").input(StatusInput).action(status)
    return cli


def main():
    """Main function."""
    create_application().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
