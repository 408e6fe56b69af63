import pulumi
import pulumi_aws as aws

from helpers import INDEX_DOCUMENT

SITE_ORIGIN_ID = "s3-site-origin"
PRICE_CLASS = "PriceClass_200"

# SPA routing: missing/denied objects fall back to the app shell.
# Error responses are never cached so fixed content shows up on the next request.
SPA_ERROR_RESPONSES = [
    {"error_code": 403, "response_code": 200, "response_page_path": f"/{INDEX_DOCUMENT}", "error_caching_min_ttl": 0},
    {"error_code": 404, "response_code": 200, "response_page_path": f"/{INDEX_DOCUMENT}", "error_caching_min_ttl": 0},
]

READ_ONLY_METHODS = ["GET", "HEAD"]


def create_cloudfront_distribution(
    *,
    site_bucket: aws.s3.Bucket,
    oai: aws.cloudfront.OriginAccessIdentity,
    default_root_object: str = INDEX_DOCUMENT,
    target_provider: aws.Provider | None,
) -> aws.cloudfront.Distribution:
    """
    Create CloudFront distribution for the site bucket:
      - single S3 origin, read through the origin access identity
      - single read-only default behavior, HTTPS only
      - 403/404 rewritten to /index.html with 200
    """
    dist = aws.cloudfront.Distribution(
        "siteDist",
        enabled=True,
        is_ipv6_enabled=True,
        http_version="http2",
        default_root_object=default_root_object,
        origins=[
            aws.cloudfront.DistributionOriginArgs(
                domain_name=site_bucket.bucket_regional_domain_name,
                origin_id=SITE_ORIGIN_ID,
                s3_origin_config=aws.cloudfront.DistributionOriginS3OriginConfigArgs(
                    origin_access_identity=oai.cloudfront_access_identity_path,
                ),
            ),
        ],
        custom_error_responses=[
            aws.cloudfront.DistributionCustomErrorResponseArgs(**r) for r in SPA_ERROR_RESPONSES
        ],
        default_cache_behavior=aws.cloudfront.DistributionDefaultCacheBehaviorArgs(
            target_origin_id=SITE_ORIGIN_ID,
            viewer_protocol_policy="redirect-to-https",
            allowed_methods=READ_ONLY_METHODS,
            cached_methods=READ_ONLY_METHODS,
            compress=True,
            min_ttl=0,
            default_ttl=86400,
            max_ttl=31536000,
            forwarded_values=aws.cloudfront.DistributionDefaultCacheBehaviorForwardedValuesArgs(
                query_string=False,
                cookies=aws.cloudfront.DistributionDefaultCacheBehaviorForwardedValuesCookiesArgs(
                    forward="none"
                ),
            ),
        ),
        restrictions=aws.cloudfront.DistributionRestrictionsArgs(
            geo_restriction=aws.cloudfront.DistributionRestrictionsGeoRestrictionArgs(
                restriction_type="none"
            )
        ),
        viewer_certificate=aws.cloudfront.DistributionViewerCertificateArgs(
            cloudfront_default_certificate=True,
        ),
        price_class=PRICE_CLASS,
        opts=pulumi.ResourceOptions(provider=target_provider),
    )

    pulumi.export("cloudFrontDomain", dist.domain_name)
    pulumi.export("cloudFrontZoneId", dist.hosted_zone_id)
    pulumi.export("cloudFrontDistId", dist.id)
    pulumi.export("cloudFrontDistArn", dist.arn)
    pulumi.export("siteUrl", pulumi.Output.concat("https://", dist.domain_name))

    return dist
