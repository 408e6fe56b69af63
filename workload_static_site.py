import pulumi
import pulumi_aws as aws

from helpers import INDEX_DOCUMENT
from workload_cloudfront import create_cloudfront_distribution
from workload_s3_site import (
    attach_identity_read_policy,
    create_origin_access_identity,
    create_site_bucket,
)


def deploy_static_site(
    *,
    bucket_name: str,
    default_root_object: str = INDEX_DOCUMENT,
    target_provider: aws.Provider | None = None,
) -> dict:
    """
    Deploy the private site bucket behind CloudFront.

    Order: bucket -> origin access identity -> read policy -> distribution.
    Only declares resources; the engine applies them on `pulumi up`.
    """
    if not bucket_name:
        raise Exception("Missing bucket name. Set config key: spa-cloudfront-site:bucketName")

    pulumi.log.info(f"Declaring static site for bucket {bucket_name}")

    site = create_site_bucket(
        bucket_name=bucket_name,
        target_provider=target_provider,
    )
    site_bucket = site["site_bucket"]

    oai = create_origin_access_identity(
        site_bucket=site_bucket,
        target_provider=target_provider,
    )

    bucket_policy = attach_identity_read_policy(
        site_bucket=site_bucket,
        oai=oai,
        target_provider=target_provider,
        depends_on=[site["public_access_block"]],
    )

    dist = create_cloudfront_distribution(
        site_bucket=site_bucket,
        oai=oai,
        default_root_object=default_root_object,
        target_provider=target_provider,
    )

    return {
        "site_bucket": site_bucket,
        "public_access_block": site["public_access_block"],
        "oai": oai,
        "bucket_policy": bucket_policy,
        "dist": dist,
    }
