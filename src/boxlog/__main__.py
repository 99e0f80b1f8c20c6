"""Demo entry point: logs a few sample events through the pretty handler."""

from dataclasses import dataclass
from datetime import timedelta

from boxlog import err_attr, group, int_attr, new_logger, string_attr


@dataclass
class Payload:
    dirt: str
    old: timedelta


@dataclass
class Document:
    weight: int
    data: Payload


def main() -> None:
    """Run the demo."""
    log = new_logger(level="debug", as_json=False, pretty=True, add_source=True)

    log.error("request failed", err_attr(RuntimeError("connection reset by peer")))

    log.info(
        "configuration loaded",
        group(
            "server",
            string_attr("host", "127.0.0.1"),
            int_attr("port", 8080),
            group("tls", string_attr("cert", "/etc/ssl/certs/server.pem")),
        ),
        group("storage", string_attr("path", "/var/lib/app/data")),
        note="paths, ports and certificates are read from the environment when set, "
        "otherwise from the defaults compiled into the binary",
    )

    scoped = log.with_group("config")
    scoped.info("empty group is dropped")
    scoped.debug("struct value", document=Document(15, Payload("sdfsdf", timedelta(minutes=15))))


if __name__ == "__main__":
    main()
