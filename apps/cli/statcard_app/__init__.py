"""Command line front end for the stat card renderer."""
