"""Core wspick logic: registry, scanning, selection and launching."""
