"""Direct-HTTP search transports and agent tool descriptors."""
