"""Configuration, theming and the kernel update workflow."""
