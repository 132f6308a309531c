"""Capability oracle for svcmap."""

from oracle.probe import (
    CapabilityOracle,
    Oracle,
    ProbeResult,
    guidance_template,
    probe,
)

__all__ = [
    "CapabilityOracle",
    "Oracle",
    "ProbeResult",
    "guidance_template",
    "probe",
]
