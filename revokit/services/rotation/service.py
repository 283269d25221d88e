# revokit/services/rotation/service.py
from __future__ import annotations

import logging
from typing import Any

from revokit.services._shared.errors import RotationIncompleteError
from revokit.services._shared.ports import TokenCodec
from revokit.services.revocation.service import RevocationCache
from revokit.services.rotation.dto import RotationOptions, TokenPair
from revokit.services.validation.service import check_key_material, check_well_formed

log = logging.getLogger(__name__)


class RotationCoordinator:
    """
    Retire an access/refresh pair and mint its replacement.

    Both invalidations complete before either new token is signed. There is no
    transaction spanning invalidate + sign: if signing fails the old pair stays
    revoked and :class:`RotationIncompleteError` is raised. Two rotations of the
    *same* pair running at once are not guarded; callers must single-flight them.
    """

    def __init__(
        self,
        *,
        cache: RevocationCache,
        codec: TokenCodec,
        defaults: RotationOptions | None = None,
    ) -> None:
        """
        :param cache: Revocation cache used to retire the old pair.
        :param codec: Signs the replacement pair.
        :param defaults: Options applied when :meth:`rotate` gets none.
        """
        self.cache = cache
        self.codec = codec
        self.defaults = defaults or RotationOptions()

    def rotate(
        self,
        access_token: str,
        refresh_token: str,
        signing_key: Any,
        options: RotationOptions | None = None,
    ) -> TokenPair:
        """
        Invalidate ``access_token`` then ``refresh_token``, then sign a new pair.

        :returns: The replacement pair.
        :raises MalformedTokenError: Either token is not three segments.
        :raises InvalidArgumentError: ``signing_key`` is missing.
        :raises RotationIncompleteError: Signing failed after both invalidations.
        """
        # 1) Preconditions, before any store access
        check_well_formed(access_token)
        check_well_formed(refresh_token)
        check_key_material(signing_key)
        opts = options or self.defaults

        # 2) Retire the old pair; any failure aborts before signing
        self.cache.mark_revoked(access_token)
        self.cache.mark_revoked(refresh_token)

        # 3) Mint the replacement pair
        try:
            new_access = self.codec.sign(opts.access_payload, signing_key, opts.access_sign_options)
            new_refresh = self.codec.sign(opts.refresh_payload, signing_key, opts.refresh_sign_options)
        except Exception as exc:
            log.error(
                "Rotation of %s/%s left the old pair revoked without replacement",
                self.cache.token_ref(access_token),
                self.cache.token_ref(refresh_token),
            )
            raise RotationIncompleteError(access_token, refresh_token) from exc

        log.debug("Rotated pair %s", self.cache.token_ref(access_token))
        return TokenPair(access_token=new_access, refresh_token=new_refresh)
