"""Scheduling snippets for Helm values and configuration hashing."""

from __future__ import annotations

import hashlib
import json
from typing import Any

_CONTROL_PLANE_ROLE = "node-role.kubernetes.io/control-plane"


def control_plane_tolerations() -> list[dict[str, Any]]:
    """Tolerations that let a pod be scheduled on the control plane."""
    return [
        {
            "key": _CONTROL_PLANE_ROLE,
            "effect": "NoSchedule",
        },
    ]


def control_plane_node_selector() -> dict[str, Any]:
    """Node labels that force scheduling onto the control plane."""
    return {
        _CONTROL_PLANE_ROLE: "",
    }


def control_plane_init_tolerations() -> list[dict[str, Any]]:
    """Tolerations for taints present while the control plane initialises."""
    return [
        {
            "key": "node.cloudprovider.kubernetes.io/uninitialized",
            "effect": "NoSchedule",
            "value": "true",
        },
        {
            "key": "node.cilium.io/agent-not-ready",
            "effect": "NoSchedule",
            "value": "true",
        },
    ]


def _marshal(value: Any) -> bytes:
    text = json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    for char, escape in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escape)
    return text.encode("utf-8")


def get_configuration_hash(config: Any) -> str:
    """Return the SHA-256 hex digest of the compact JSON form of ``config``.

    Used to restart applications that ignore configuration changes.
    Raises ``TypeError`` if ``config`` cannot be encoded as JSON.
    """
    return hashlib.sha256(_marshal(config)).hexdigest()