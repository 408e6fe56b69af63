import pulumi

from helpers import INDEX_DOCUMENT, require_bucket_name
from providers import make_target_provider
from workload_static_site import deploy_static_site

cfg = pulumi.Config()
aws_cfg = pulumi.Config("aws")

# -------------------------------------------------------------------
# Core config (required in every stack)
# -------------------------------------------------------------------
bucket_name = require_bucket_name(cfg)

# Optional knobs
default_root_object = cfg.get("defaultRootObject") or INDEX_DOCUMENT
account_id = cfg.get("accountId")
role_name = cfg.get("deployRoleName")
region = aws_cfg.get("region")

stack = pulumi.get_stack()
pulumi.export("stack", stack)

target_provider = make_target_provider(
    account_id=account_id,
    role_name=role_name,
    region=region,
)

deploy_static_site(
    bucket_name=bucket_name,
    default_root_object=default_root_object,
    target_provider=target_provider,
)
