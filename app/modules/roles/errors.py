"""
Error taxonomy for the role consistency service.

IdentityFetchError, ProfileReadError and ProfileWriteError fail a run.
ProfileMissing and MetadataWriteError are findings: logged and reported in the
outcome message, but the run still succeeds.
"""


class RoleConsistencyError(Exception):
    pass


class IdentityFetchError(RoleConsistencyError):
    """Listing accounts from Supabase Auth failed."""


class ProfileMissing(RoleConsistencyError):
    """The target account has no profiles row."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"No profile found for account {account_id}")


class ProfileReadError(RoleConsistencyError):
    """Reading the profiles row failed (an absent row is ProfileMissing instead)."""


class ProfileWriteError(RoleConsistencyError):
    """Updating the profiles row failed."""


class MetadataWriteError(RoleConsistencyError):
    """Mirroring the role into user_metadata failed."""
