import pulumi
import pulumi_aws as aws


def make_target_provider(
    *,
    account_id: str | None,
    role_name: str | None,
    region: str | None = None,
) -> aws.Provider | None:
    """
    Create the AWS provider used for the site resources.

    - accountId + deployRoleName set: explicit provider assuming
      arn:aws:iam::<accountId>:role/<deployRoleName>
    - neither set: None, resources use the ambient default provider
      (aws:region / aws:profile from stack config)
    """
    if not account_id and not role_name:
        pulumi.log.info("Using default AWS provider from stack config")
        return None

    if not account_id or not role_name:
        raise Exception(
            "accountId and deployRoleName must be set together. "
            "Set config keys: spa-cloudfront-site:accountId, spa-cloudfront-site:deployRoleName"
        )

    pulumi.log.info(f"Assuming role {role_name} in account {account_id}")
    return aws.Provider(
        "target",
        assume_role=aws.ProviderAssumeRoleArgs(
            role_arn=f"arn:aws:iam::{account_id}:role/{role_name}",
            session_name="pulumi",
        ),
        region=region,
    )
