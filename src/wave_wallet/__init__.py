"""Wave Wallet core — secret provisioning and endpoint selection."""
