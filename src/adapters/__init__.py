"""Gateway registry/factory."""
from __future__ import annotations

from .base import GatewayResponse, RemoteGateway
from .memory import InMemoryGateway
from .proxy import ProxyGateway

_GATEWAYS: dict[str, type[RemoteGateway]] = {
    ProxyGateway.name: ProxyGateway,
    InMemoryGateway.name: InMemoryGateway,
}


def get_gateway(name: str, **kwargs) -> RemoteGateway:
    cls = _GATEWAYS.get(name.lower())
    if not cls:
        raise ValueError(f"Unknown gateway: {name}")
    return cls(**kwargs)


__all__ = ["get_gateway", "RemoteGateway", "GatewayResponse", "ProxyGateway", "InMemoryGateway"]
