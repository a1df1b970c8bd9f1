"""Test configuration and fixtures."""

import logfire

# Keep telemetry local; spans still run so instrumentation is exercised
logfire.configure(send_to_logfire=False, console=False)
