import pulumi
import pulumi_aws as aws

from helpers import INDEX_DOCUMENT, objects_arn


def create_site_bucket(
    *,
    bucket_name: str,
    target_provider: aws.Provider | None,
):
    """
    Creates:
      - site content bucket (private, website index/error -> index.html)
      - public access block

    The bucket is force-destroyed with the stack, objects included.

    Returns:
      {"site_bucket": ..., "public_access_block": ...}
    """
    site_bucket = aws.s3.Bucket(
        "siteBucket",
        bucket=bucket_name,
        acl="private",
        website=aws.s3.BucketWebsiteArgs(
            index_document=INDEX_DOCUMENT,
            error_document=INDEX_DOCUMENT,
        ),
        force_destroy=True,
        tags={"Project": "spa-site", "Bucket": bucket_name},
        opts=pulumi.ResourceOptions(provider=target_provider, retain_on_delete=False),
    )

    public_access_block = aws.s3.BucketPublicAccessBlock(
        "siteBucketPab",
        bucket=site_bucket.id,
        block_public_acls=True,
        ignore_public_acls=True,
        block_public_policy=True,
        restrict_public_buckets=True,
        opts=pulumi.ResourceOptions(provider=target_provider),
    )

    pulumi.export("siteBucketName", site_bucket.bucket)
    pulumi.export("siteBucketArn", site_bucket.arn)

    return {
        "site_bucket": site_bucket,
        "public_access_block": public_access_block,
    }


def create_origin_access_identity(
    *,
    site_bucket: aws.s3.Bucket,
    target_provider: aws.Provider | None,
) -> aws.cloudfront.OriginAccessIdentity:
    """CloudFront identity that is the only reader of the site bucket."""
    oai = aws.cloudfront.OriginAccessIdentity(
        "siteOai",
        comment=pulumi.Output.concat(site_bucket.bucket, " access identity"),
        opts=pulumi.ResourceOptions(provider=target_provider),
    )

    pulumi.export("originAccessIdentityId", oai.id)

    return oai


def attach_identity_read_policy(
    *,
    site_bucket: aws.s3.Bucket,
    oai: aws.cloudfront.OriginAccessIdentity,
    target_provider: aws.Provider | None,
    depends_on: list[pulumi.Resource] | None = None,
) -> aws.s3.BucketPolicy:
    """
    Bucket policy: allow only the origin access identity to read objects.
    Keeps the Pulumi name 'siteBucketPolicy' stable.
    """
    bucket_policy_doc = aws.iam.get_policy_document_output(statements=[
        aws.iam.GetPolicyDocumentStatementArgs(
            sid="AllowCloudFrontOaiRead",
            effect="Allow",
            actions=["s3:GetObject"],
            resources=[site_bucket.arn.apply(objects_arn)],
            principals=[aws.iam.GetPolicyDocumentStatementPrincipalArgs(
                type="AWS",
                identifiers=[oai.iam_arn],
            )],
        )
    ])

    return aws.s3.BucketPolicy(
        "siteBucketPolicy",
        bucket=site_bucket.id,
        policy=bucket_policy_doc.json,
        opts=pulumi.ResourceOptions(provider=target_provider, depends_on=depends_on or []),
    )
