from django.db import models


class ContentAccess(models.Model):
    """
    Permission holder for the ``access content`` permission.

    No table backs this model; it exists so the permission has a content type
    to hang off.
    """

    class Meta:
        managed = False
        default_permissions = ()
        permissions = [("access_content", "access content")]
