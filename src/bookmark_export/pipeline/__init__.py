"""Pipeline layer — end-to-end list export orchestration."""
