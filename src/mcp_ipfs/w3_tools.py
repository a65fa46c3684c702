"""Tool handlers: one coroutine per MCP tool, named after the tool."""

from __future__ import annotations

import logging
from typing import Any

from mcp_ipfs.config import ServerSettings
from mcp_ipfs.errors import OutputParseError, ToolUnavailableError
from mcp_ipfs.models.command_result import CommandResult
from mcp_ipfs.ndjson import first_record, parse_first_record, parse_json_document, parse_ndjson
from mcp_ipfs.schemas import tool_args as ta
from mcp_ipfs.text_parsers import parse_blob_stored, parse_space_listing
from mcp_ipfs.w3_client import W3Client

logger = logging.getLogger(__name__)

Payload = dict[str, Any]

SPACE_CREATE_UNAVAILABLE = (
    "`w3 space create` cannot be run via MCP due to interactive recovery key prompts. "
    "Please run this command manually in your terminal."
)


def message_payload(message: str, result: CommandResult) -> Payload:
    return {"message": message, "output": result.output}


def listing_payload(key: str, result: CommandResult, json_output: bool) -> Payload:
    if json_output:
        return {key: parse_ndjson(result.stdout)}
    return {"output": result.output}


class W3Tools:
    def __init__(self, client: W3Client, settings: ServerSettings) -> None:
        self._client = client
        self._settings = settings

    async def _run(self, args: ta.ToolArgs) -> CommandResult:
        return await self._client.run(args.argv())

    # Account and agent

    async def w3_login(self, args: ta.W3LoginArgs) -> Payload:
        email = self._settings.login_email
        if not email:
            raise ToolUnavailableError("W3_LOGIN_EMAIL is not configured; cannot start the login flow.")
        logger.info("Initiating login for %s. User MUST check email to authorize.", email)
        result = await self._client.run(args.argv_for(email))
        output = (
            f"Login process initiated for {email}. Output from w3:\n"
            f"Stdout: {result.stdout}\nStderr: {result.stderr}\n"
            "Please check your email to complete the login."
        )
        return {"message": output}

    async def w3_account_ls(self, args: ta.W3AccountLsArgs) -> Payload:
        result = await self._run(args)
        try:
            accounts = parse_ndjson(result.stdout)
        except OutputParseError as exc:
            logger.warning("w3_account_ls: Failed to parse output as NDJSON: %s", result.stdout)
            raise OutputParseError(
                f"Failed to parse JSON output for w3_account_ls. Raw output: {result.stdout}",
                raw_output=result.stdout,
            ) from exc
        return {"message": "Authorized accounts retrieved.", "accounts": accounts}

    async def w3_plan_get(self, args: ta.W3PlanGetArgs) -> Payload:
        result = await self._run(args)
        try:
            plan = first_record(parse_ndjson(result.stdout))
        except OutputParseError as exc:
            logger.warning("w3_plan_get: Failed to parse output as NDJSON: %s", result.stdout)
            raise OutputParseError(
                f"Failed to parse JSON output for w3_plan_get. Raw output: {result.stdout}",
                raw_output=result.stdout,
            ) from exc
        return {"message": "Plan information retrieved.", "planData": plan}

    async def w3_coupon_create(self, args: ta.W3CouponCreateArgs) -> Payload:
        result = await self._run(args)
        return message_payload("Attempted to claim coupon.", result)

    async def w3_key_create(self, args: ta.W3KeyCreateArgs) -> Payload:
        result = await self._run(args)
        if args.json_output:
            try:
                key_data = parse_json_document(result.stdout)
            except OutputParseError:
                logger.warning("Failed to parse key create JSON, returning raw.")
            else:
                return {"message": "New key pair created (JSON format).", "keyData": key_data}
        return message_payload("New key pair created (raw output).", result)

    async def w3_reset(self, args: ta.W3ResetArgs) -> Payload:
        result = await self._run(args)
        return message_payload("Agent state reset successfully (proofs/delegations removed).", result)

    # Spaces

    async def w3_space_ls(self, args: ta.W3SpaceLsArgs) -> Payload:
        result = await self._run(args)
        spaces = parse_space_listing(result.stdout)
        return {"spaces": [space.to_payload() for space in spaces]}

    async def w3_space_use(self, args: ta.W3SpaceUseArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Successfully set current space to {args.space_did}", result)

    async def w3_space_create(self, args: ta.W3SpaceCreateArgs) -> Payload:
        raise ToolUnavailableError(SPACE_CREATE_UNAVAILABLE)

    async def w3_space_info(self, args: ta.W3SpaceInfoArgs) -> Payload:
        result = await self._run(args)
        if not args.json_output:
            return {"output": result.output}
        try:
            info = parse_first_record(result.stdout)
        except OutputParseError as exc:
            logger.warning("w3_space_info: Failed to parse output as NDJSON or JSON: %s", result.stdout)
            raise OutputParseError(
                f"Failed to parse JSON output for w3_space_info. Raw output: {result.stdout}",
                raw_output=result.stdout,
            ) from exc
        return {"spaceInfo": info}

    async def w3_space_add(self, args: ta.W3SpaceAddArgs) -> Payload:
        result = await self._run(args)
        return message_payload("Space added successfully from proof.", result)

    async def w3_space_provision(self, args: ta.W3SpaceProvisionArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Space {args.space_did} provisioned for customer {args.customer_id}.", result)

    async def w3_usage_report(self, args: ta.W3UsageReportArgs) -> Payload:
        result = await self._run(args)
        if args.json_output:
            try:
                return {"usageReport": first_record(parse_ndjson(result.stdout))}
            except OutputParseError:
                logger.warning("Failed to parse usage report JSON, returning raw.")
        return {"output": result.output}

    # Uploads

    async def w3_up(self, args: ta.W3UpArgs) -> Payload:
        result = await self._run(args)
        return message_payload("Upload successful.", result)

    async def w3_ls(self, args: ta.W3LsArgs) -> Payload:
        result = await self._run(args)
        return listing_payload("uploads", result, args.json_output)

    async def w3_rm(self, args: ta.W3RmArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Successfully removed listing for CID {args.cid}.", result)

    async def w3_open(self, args: ta.W3OpenArgs) -> Payload:
        full_path = f"{args.cid}/{args.path}" if args.path else args.cid
        url = f"{self._settings.gateway_prefix()}{full_path}"
        return {"message": f"To view the content, open this URL in your browser: {url}", "url": url}

    # Delegations and proofs

    async def w3_delegation_create(self, args: ta.W3DelegationCreateArgs) -> Payload:
        result = await self._run(args)
        if args.base64:
            message = "Delegation created successfully (base64 output)."
        else:
            message = f"Delegation created successfully (output file: {args.output})."
        return message_payload(message, result)

    async def w3_delegation_ls(self, args: ta.W3DelegationLsArgs) -> Payload:
        result = await self._run(args)
        return listing_payload("delegations", result, args.json_output)

    async def w3_delegation_revoke(self, args: ta.W3DelegationRevokeArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Successfully revoked delegation {args.delegation_cid}.", result)

    async def w3_proof_add(self, args: ta.W3ProofAddArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Successfully added proof from {args.proof_path}.", result)

    async def w3_proof_ls(self, args: ta.W3ProofLsArgs) -> Payload:
        result = await self._run(args)
        return listing_payload("proofs", result, args.json_output)

    async def w3_bridge_generate_tokens(self, args: ta.W3BridgeGenerateTokensArgs) -> Payload:
        result = await self._run(args)
        if args.json_output:
            try:
                token_data = parse_json_document(result.stdout)
            except OutputParseError:
                logger.warning("Failed to parse bridge tokens JSON, returning raw.")
            else:
                return {"message": "Bridge tokens generated (JSON format).", "tokenData": token_data}
        return message_payload("Bridge tokens generated (raw output).", result)

    async def w3_can_access_claim(self, args: ta.W3CanAccessClaimArgs) -> Payload:
        result = await self._run(args)
        return message_payload("Capability claim attempted.", result)

    # Capabilities (advanced)

    async def w3_can_blob_add(self, args: ta.W3CanBlobAddArgs) -> Payload:
        result = await self._run(args)
        stored = parse_blob_stored(result.stdout)
        if stored is None:
            logger.warning("w3_can_blob_add: Could not parse multihash/CID from output: %s", result.stdout)
            return message_payload("Blob added, but output parsing failed.", result)
        multihash, cid = stored
        return {"message": "Blob added successfully.", "multihash": multihash, "cid": cid, "output": result.output}

    async def w3_can_blob_ls(self, args: ta.W3CanBlobLsArgs) -> Payload:
        result = await self._run(args)
        return listing_payload("blobs", result, args.json_output)

    async def w3_can_blob_rm(self, args: ta.W3CanBlobRmArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Blob {args.multihash} removed successfully.", result)

    async def w3_can_index_add(self, args: ta.W3CanIndexAddArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Index CID {args.cid} added successfully.", result)

    async def w3_can_upload_add(self, args: ta.W3CanUploadAddArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Upload with root {args.root_cid} registered successfully.", result)

    async def w3_can_upload_ls(self, args: ta.W3CanUploadLsArgs) -> Payload:
        result = await self._run(args)
        return listing_payload("uploads", result, args.json_output)

    async def w3_can_upload_rm(self, args: ta.W3CanUploadRmArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Upload {args.root_cid} removed successfully.", result)

    async def w3_can_store_add(self, args: ta.W3CanStoreAddArgs) -> Payload:
        result = await self._run(args)
        return message_payload("CAR file stored successfully.", result)

    async def w3_can_store_ls(self, args: ta.W3CanStoreLsArgs) -> Payload:
        result = await self._run(args)
        return listing_payload("stores", result, args.json_output)

    async def w3_can_store_rm(self, args: ta.W3CanStoreRmArgs) -> Payload:
        result = await self._run(args)
        return message_payload(f"Successfully removed CAR shard {args.car_cid}.", result)

    async def w3_can_filecoin_info(self, args: ta.W3CanFilecoinInfoArgs) -> Payload:
        result = await self._run(args)
        try:
            return {"filecoinInfo": parse_json_document(result.stdout)}
        except OutputParseError:
            return {"output": result.output}
