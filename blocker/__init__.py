"""
HTB Blocker - escalating firewall blocks for reported attacker IPs

This package provides:
- address: Normalize raw address tokens from CSV exports
- whitelist: Trusted addresses/networks (never block)
- state: Offense counts per address, persisted across runs
- escalation: Offense count -> timed or permanent block
- planner: Per-address pipeline and run summary
- firewall: RouterOS address-list applier (or dry-run)
- csv_input: Input batch reader
- bootstrap: First-run setup
- logger: One-line-per-event logging
- config: Defaults and config.env loader
"""

__version__ = "1.0.0"
