"""Command line interface for the EMQX management client."""
