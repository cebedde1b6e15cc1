"""Google Cloud provider: GKE clusters and GCE instances."""
