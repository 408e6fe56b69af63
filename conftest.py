"""
Root pytest configuration.
Swaps the Pulumi engine for an in-memory mock that records every resource
registration and answers the policy-document invoke.
"""

import json

import pulumi
import pytest

PROJECT = "spa-cloudfront-site"
REGION = "ap-northeast-1"


def _one_or_many(values):
    values = list(values or [])
    return values[0] if len(values) == 1 else values


def render_policy_document(args: dict) -> str:
    """Render getPolicyDocument inputs the way AWS does: single-item lists collapse."""
    statements = []
    for s in args.get("statements") or []:
        statement = {"Effect": s.get("effect") or "Allow"}
        if s.get("sid"):
            statement["Sid"] = s["sid"]
        statement["Action"] = _one_or_many(s.get("actions"))
        statement["Resource"] = _one_or_many(s.get("resources"))
        principals: dict = {}
        for p in s.get("principals") or []:
            principals.setdefault(p["type"], []).extend(p.get("identifiers") or [])
        if principals:
            statement["Principal"] = {k: _one_or_many(v) for k, v in principals.items()}
        statements.append(statement)
    return json.dumps({"Version": "2012-10-17", "Statement": statements})


class SiteMocks(pulumi.runtime.Mocks):
    """Records registered resources and fills in the outputs AWS would compute."""

    def __init__(self):
        self.resources: list[dict] = []
        self.calls: list[dict] = []

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        inputs = dict(args.inputs)
        self.resources.append({"type": args.typ, "name": args.name, "inputs": inputs})

        state = dict(inputs)
        resource_id = f"{args.name}-id"

        if args.typ == "aws:s3/bucket:Bucket":
            bucket = inputs.get("bucket") or args.name
            resource_id = bucket
            state["arn"] = f"arn:aws:s3:::{bucket}"
            state["bucketRegionalDomainName"] = f"{bucket}.s3.{REGION}.amazonaws.com"
        elif args.typ == "aws:cloudfront/originAccessIdentity:OriginAccessIdentity":
            resource_id = "E2QWRUHEXAMPLE"
            state["iamArn"] = f"arn:aws:iam::cloudfront:user/CloudFront Origin Access Identity {resource_id}"
            state["cloudfrontAccessIdentityPath"] = f"origin-access-identity/cloudfront/{resource_id}"
            state["s3CanonicalUserId"] = "79a59df900b949e55d96a1e698fbaced"
        elif args.typ == "aws:cloudfront/distribution:Distribution":
            resource_id = "E1EXAMPLEDIST"
            state["arn"] = f"arn:aws:cloudfront::123456789012:distribution/{resource_id}"
            state["domainName"] = "d111111abcdef8.cloudfront.net"
            state["hostedZoneId"] = "Z2FDTNDATAQYW2"

        return resource_id, state

    def call(self, args: pulumi.runtime.MockCallArgs):
        self.calls.append({"token": args.token, "args": dict(args.args)})
        if args.token == "aws:iam/getPolicyDocument:getPolicyDocument":
            return {"id": "policy-doc", "json": render_policy_document(args.args)}
        return {}

    def of_type(self, typ: str) -> list[dict]:
        return [r for r in self.resources if r["type"] == typ]


@pytest.fixture
def site_mocks():
    mocks = SiteMocks()
    pulumi.runtime.set_mocks(mocks, project=PROJECT, stack="test", preview=False)
    return mocks


@pytest.fixture
def unconfigured_site_mocks():
    # Separate project namespace, so no <project>:bucketName is ever set.
    mocks = SiteMocks()
    pulumi.runtime.set_mocks(mocks, project=f"{PROJECT}-unconfigured", stack="test", preview=False)
    return mocks


@pytest.fixture
def run_pulumi():
    """
    Run a callable as a Pulumi program and wait for every registration.
    Returns whatever the callable returned.
    """

    def _run(fn):
        captured = {}

        @pulumi.runtime.test
        def program():
            captured["result"] = fn()

        program()
        return captured.get("result")

    return _run
