"""Core release logic for webdeploy."""
