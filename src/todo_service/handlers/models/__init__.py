"""Environment variable models."""
