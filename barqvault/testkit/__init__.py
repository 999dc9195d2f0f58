"""Sample payloads and temporary file helpers for testing code that uses the vault."""