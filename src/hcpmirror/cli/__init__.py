"""
Command-line interface: hcp-sync, hcp-link and the hcpmirror umbrella app.
"""
