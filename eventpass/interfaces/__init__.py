"""Interface adapters exposing the application to clients."""
