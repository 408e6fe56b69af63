import pulumi

# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------

INDEX_DOCUMENT = "index.html"


def require_bucket_name(cfg: pulumi.Config) -> str:
    """
    Resolve the site bucket name from stack config.

    Raises pulumi.ConfigMissingError when the key is absent, so the program
    fails before any resource is declared.
    """
    bucket_name = (cfg.require("bucketName") or "").strip()
    if not bucket_name:
        raise Exception("Empty bucket name. Set config key: spa-cloudfront-site:bucketName")
    return bucket_name


def objects_arn(bucket_arn: str) -> str:
    return f"{bucket_arn}/*"
