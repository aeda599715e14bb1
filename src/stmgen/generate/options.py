"""
Generation options supplied alongside the chip identifier.

Each optional artifact is an Optional field on GenerationOptionSet, so a
toggle that is enabled but lacks its value is rejected here rather than
reaching the planner.
"""

import ipaddress
import re
from dataclasses import dataclass
from typing import Optional

from stmgen.chips.errors import StmgenError

DEFAULT_PROJECT_NAME = "firmware"
DEFAULT_ADAPTER_INTERFACE = "stlink.cfg"

_HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
_CRATE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_NUMERIC_HOST = re.compile(r"^[0-9.]+$")
_PORT = re.compile(r"^[1-9][0-9]{0,4}$")
_INTERFACE_SCRIPT = re.compile(r"^[A-Za-z0-9_./-]+\.cfg$")


class OptionError(StmgenError):
    """Exception raised for invalid generation options."""

    pass


def _is_hostname(host: str) -> bool:
    if len(host) > 253:
        return False
    return all(_HOSTNAME_LABEL.fullmatch(label) for label in host.rstrip(".").split("."))


def _is_host(host: str) -> bool:
    if ":" in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return False
        return True
    if _NUMERIC_HOST.fullmatch(host):
        try:
            ipaddress.IPv4Address(host)
        except ValueError:
            return False
        return True
    return _is_hostname(host)


@dataclass(frozen=True)
class RttAddress:
    """
    A validated host:port pair for RTT log forwarding.

    The host is an IPv4 literal, an unbracketed IPv6 literal or a hostname;
    the port is an integer in 1-65535. Direct construction is validated the
    same way as parse().
    """

    host: str
    port: int

    def __post_init__(self) -> None:
        if not isinstance(self.host, str) or not _is_host(self.host):
            raise OptionError(f"Invalid RTT host: {self.host!r}")
        if (
            not isinstance(self.port, int)
            or isinstance(self.port, bool)
            or not 1 <= self.port <= 65535
        ):
            raise OptionError(f"Invalid RTT port: {self.port!r} (expected 1-65535)")

    @classmethod
    def parse(cls, text: str) -> "RttAddress":
        """
        Parse a host:port string.

        Accepts IPv4 literals, bracketed IPv6 literals ("[::1]:1008") and
        hostnames. The port must be written without leading zeros so the
        address renders back exactly as given.

        Raises:
            OptionError: If the address is not a valid host:port pair
        """
        value = text.strip()
        if not value:
            raise OptionError("RTT address is empty")

        if value.startswith("["):
            host, sep, port_str = value[1:].partition("]:")
            if not sep:
                raise OptionError(f"Invalid RTT address: {text!r} (expected [ipv6]:port)")
            if ":" not in host:
                raise OptionError(f"Invalid IPv6 host in RTT address {text!r}")
        else:
            host, sep, port_str = value.rpartition(":")
            if not sep or not host:
                raise OptionError(f"Invalid RTT address: {text!r} (expected host:port)")
            if ":" in host:
                raise OptionError(
                    f"Invalid RTT address: {text!r} (wrap IPv6 hosts in brackets)"
                )

        if not _PORT.fullmatch(port_str):
            raise OptionError(f"Invalid port in RTT address {text!r}")

        try:
            return cls(host=host, port=int(port_str))
        except OptionError as e:
            raise OptionError(f"Invalid RTT address {text!r}: {e}") from e

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def normalize_adapter_config(choice: str) -> str:
    """Normalize an adapter config choice ("target/stm32g4x.cfg" -> "stm32g4x.cfg")."""
    value = choice.strip()
    if value.startswith("target/"):
        value = value[len("target/") :]
    return value


@dataclass(frozen=True)
class GenerationOptionSet:
    """
    Orthogonal generation toggles.

    Attributes:
        rtt_forward: Forwarding address, or None to skip RTT forwarding
        debug_config: OpenOCD target script name, or None to skip openocd.cfg
        project_name: Cargo crate name for the generated project
        adapter_interface: OpenOCD interface script (e.g. "stlink.cfg")
    """

    rtt_forward: Optional[RttAddress] = None
    debug_config: Optional[str] = None
    project_name: str = DEFAULT_PROJECT_NAME
    adapter_interface: str = DEFAULT_ADAPTER_INTERFACE

    def __post_init__(self) -> None:
        if not _CRATE_NAME.fullmatch(self.project_name):
            raise OptionError(f"Invalid project name: {self.project_name!r}")
        if not _INTERFACE_SCRIPT.fullmatch(self.adapter_interface):
            raise OptionError(
                f"Invalid adapter interface: {self.adapter_interface!r} (expected an OpenOCD .cfg script name)"
            )
        if self.debug_config is not None and not self.debug_config:
            raise OptionError("Adapter config choice is empty")

    @classmethod
    def from_answers(
        cls,
        rtt_enabled: bool = False,
        rtt_address: Optional[str] = None,
        debug_config_enabled: bool = False,
        adapter_config_choice: Optional[str] = None,
        project_name: Optional[str] = None,
        adapter_interface: Optional[str] = None,
    ) -> "GenerationOptionSet":
        """
        Build an option set from raw prompt answers.

        Values belonging to a disabled toggle are ignored.

        Raises:
            OptionError: If an enabled toggle is missing its value or the
                value is malformed
        """
        rtt_forward = None
        if rtt_enabled:
            if not rtt_address:
                raise OptionError("RTT forwarding is enabled but no address was given")
            rtt_forward = RttAddress.parse(rtt_address)

        debug_config = None
        if debug_config_enabled:
            if not adapter_config_choice or not adapter_config_choice.strip():
                raise OptionError(
                    "Debug config is enabled but no adapter config file was given"
                )
            debug_config = normalize_adapter_config(adapter_config_choice)

        return cls(
            rtt_forward=rtt_forward,
            debug_config=debug_config,
            project_name=project_name or DEFAULT_PROJECT_NAME,
            adapter_interface=adapter_interface or DEFAULT_ADAPTER_INTERFACE,
        )
