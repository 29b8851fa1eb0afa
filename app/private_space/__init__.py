"""
Private space app: a feed shared by exactly two members.

Members unlock the feed with a shared passcode and receive a signed,
time-limited token to send in the ``X-Private-Space-Token`` header.

Usage:
    from private_space.services import PrivateSpaceService

    result = PrivateSpaceService.unlock(user, "secret")
    token = result.data["token"]
    PrivateSpaceService.add_post(user, token, "Bonne nuit")
"""
