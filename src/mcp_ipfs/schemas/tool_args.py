"""Argument models for every w3 tool.

Each ``ToolArgs`` subclass below is one MCP tool. The tool name is derived from
the class name (``W3CanUploadLsArgs`` -> ``w3_can_upload_ls``), the description
from the class docstring and the input schema from the fields, using the
camelCase aliases callers send. ``argv()`` translates validated arguments into
the arguments passed to the ``w3`` executable.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

DID_KEY_PATTERN = r"^did:key:"
RESET_CONFIRMATION = "yes-i-am-sure"

JSON_FLAG_DESCRIPTION = "Format output as newline delimited JSON (default: true)."
SIZE_DESCRIPTION = "Desired number of results to return."
CURSOR_DESCRIPTION = "Opaque cursor string from a previous response for pagination."


def _whole_float_to_int(value: Any) -> Any:
    # JSON clients may send 10.0 for 10.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


WholeNumber = Annotated[int, BeforeValidator(_whole_float_to_int)]


class ToolArgs(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, strict=True)

    def argv(self) -> list[str]:
        """
        Arguments for ``w3`` (without the executable itself).
        ``W3OpenArgs`` and ``W3SpaceCreateArgs`` run no command and keep this default;
        ``W3LoginArgs`` needs the configured email and uses ``argv_for`` instead.
        """
        raise NotImplementedError(f"{type(self).__name__} does not map to a w3 command.")


def _can_flags(capabilities: list[str]) -> list[str]:
    argv: list[str] = []
    for capability in capabilities:
        argv.extend(["--can", capability])
    return argv


def _page_flags(size: int | None, cursor: str | None) -> list[str]:
    argv: list[str] = []
    if size:
        argv.extend(["--size", str(size)])
    if cursor:
        argv.extend(["--cursor", cursor])
    return argv


class W3LoginArgs(ToolArgs):
    """Initiates the w3 login process using the pre-configured email (W3_LOGIN_EMAIL env var). User MUST check email to complete authentication."""

    def argv_for(self, email: str) -> list[str]:
        return ["login", email]


class W3SpaceLsArgs(ToolArgs):
    """Lists the spaces known to the agent, marking the current one."""

    def argv(self) -> list[str]:
        return ["space", "ls"]


class W3SpaceUseArgs(ToolArgs):
    """Sets the current space used by other commands."""

    space_did: str = Field(pattern=DID_KEY_PATTERN, description="The DID of the space to select (e.g., did:key:...).")

    def argv(self) -> list[str]:
        return ["space", "use", self.space_did]


class W3SpaceCreateArgs(ToolArgs):
    """Creates a new space with a user-friendly name."""

    name: Optional[str] = Field(default=None, description="An optional user-friendly name for the new space.")


class W3UpArgs(ToolArgs):
    """Uploads files or directories to the current space."""

    paths: list[str] = Field(
        min_length=1,
        description="Array of one or more ABSOLUTE paths to files or directories to upload.",
    )
    no_wrap: bool = Field(default=False, description="Don't wrap input files with a directory.")
    hidden: bool = Field(default=False, description="Include paths starting with '.'.")

    def argv(self) -> list[str]:
        argv = ["up", *self.paths]
        if self.no_wrap:
            argv.append("--no-wrap")
        if self.hidden:
            argv.append("--hidden")
        return argv


class W3LsArgs(ToolArgs):
    """Lists uploads in the current space."""

    json_output: bool = Field(default=True, alias="json", description=JSON_FLAG_DESCRIPTION)

    def argv(self) -> list[str]:
        return ["ls", "--json"] if self.json_output else ["ls"]


class W3RmArgs(ToolArgs):
    """Removes an upload from the uploads listing of the current space."""

    cid: str = Field(description="Root Content CID (e.g., bafy...) to remove from the uploads listing.")
    remove_shards: bool = Field(
        default=False,
        description="Also remove underlying shards from the store (default: false). Use with caution.",
    )

    def argv(self) -> list[str]:
        argv = ["rm", self.cid]
        if self.remove_shards:
            argv.append("--shards")
        return argv


class W3OpenArgs(ToolArgs):
    """Builds a gateway URL for viewing content by CID."""

    cid: str = Field(description="The CID of the content to open.")
    path: Optional[str] = Field(default=None, description="Optional path within the content to append to the URL.")


class W3SpaceInfoArgs(ToolArgs):
    """Shows information about a space."""

    space_did: Optional[str] = Field(
        default=None,
        pattern=DID_KEY_PATTERN,
        description="Optional DID of the space to get info for (defaults to current space).",
    )
    json_output: bool = Field(default=True, alias="json", description=JSON_FLAG_DESCRIPTION)

    def argv(self) -> list[str]:
        argv = ["space", "info"]
        if self.space_did:
            argv.extend(["--space", self.space_did])
        if self.json_output:
            argv.append("--json")
        return argv


class W3SpaceAddArgs(ToolArgs):
    """Adds a space to the agent from a delegation proof."""

    proof: str = Field(description="Filesystem path to a CAR encoded UCAN proof, or a base64 identity CID string.")

    def argv(self) -> list[str]:
        return ["space", "add", self.proof]


class W3DelegationCreateArgs(ToolArgs):
    """Delegates capabilities on the current space to an audience DID."""

    audience_did: str = Field(description="The DID of the audience receiving the delegation (e.g., did:key:...).")
    capabilities: list[str] = Field(
        min_length=1,
        description="One or more capabilities to delegate (e.g., ['space/*', 'upload/*']).",
    )
    name: Optional[str] = Field(default=None, description="Human-readable name for the audience.")
    type: Optional[Literal["device", "app", "service"]] = Field(default=None, description="Type of the audience.")
    output: Optional[str] = Field(
        default=None,
        description="ABSOLUTE path of file to write the exported delegation CAR file to.",
    )
    base64: bool = Field(
        default=False,
        description="Format output as base64 identity CID string instead of writing to a file.",
    )

    def argv(self) -> list[str]:
        argv = ["delegation", "create", self.audience_did, *_can_flags(self.capabilities)]
        if self.name:
            argv.extend(["--name", self.name])
        if self.type:
            argv.extend(["--type", self.type])
        if self.output:
            argv.extend(["--output", self.output])
        if self.base64:
            argv.append("--base64")
        return argv


class W3DelegationLsArgs(ToolArgs):
    """Lists delegations created by this agent."""

    json_output: bool = Field(default=True, alias="json", description=JSON_FLAG_DESCRIPTION)

    def argv(self) -> list[str]:
        return ["delegation", "ls", "--json"] if self.json_output else ["delegation", "ls"]


class W3DelegationRevokeArgs(ToolArgs):
    """Revokes a delegation by CID."""

    delegation_cid: str = Field(description="The CID of the delegation to revoke.")
    proof: Optional[str] = Field(
        default=None,
        description="ABSOLUTE path to a file containing the delegation and any additional proofs needed.",
    )

    def argv(self) -> list[str]:
        argv = ["delegation", "revoke", self.delegation_cid]
        if self.proof:
            argv.extend(["--proof", self.proof])
        return argv


class W3ProofAddArgs(ToolArgs):
    """Adds a proof delegated to this agent."""

    proof_path: str = Field(description="ABSOLUTE path to the CAR encoded proof file delegated to this agent.")

    def argv(self) -> list[str]:
        return ["proof", "add", self.proof_path]


class W3ProofLsArgs(ToolArgs):
    """Lists proofs delegated to this agent."""

    json_output: bool = Field(default=True, alias="json", description=JSON_FLAG_DESCRIPTION)

    def argv(self) -> list[str]:
        return ["proof", "ls", "--json"] if self.json_output else ["proof", "ls"]


class W3KeyCreateArgs(ToolArgs):
    """Generates and prints a new ed25519 key pair. Does not automatically use it for the agent."""

    json_output: bool = Field(default=False, alias="json", description="Export the new key pair as dag-json (default: false).")

    def argv(self) -> list[str]:
        return ["key", "create", "--json"] if self.json_output else ["key", "create"]


class W3BridgeGenerateTokensArgs(ToolArgs):
    """Generates authentication tokens for using the UCAN-HTTP bridge."""

    capabilities: list[str] = Field(
        min_length=1,
        description="One or more capabilities to delegate (e.g., ['space/info']).",
    )
    expiration: Optional[WholeNumber] = Field(
        default=None,
        gt=0,
        description="Unix timestamp (in seconds) for expiration. Zero means no expiration.",
    )
    json_output: bool = Field(default=True, alias="json", description="Output JSON suitable for fetch headers (default: true).")

    def argv(self) -> list[str]:
        argv = ["bridge", "generate-tokens", *_can_flags(self.capabilities)]
        if self.expiration is not None:
            argv.extend(["--expiration", str(self.expiration)])
        if self.json_output:
            argv.append("--json")
        return argv


class W3CanBlobAddArgs(ToolArgs):
    """Stores a single file as a blob directly with the service."""

    path: str = Field(description="ABSOLUTE path to the blob file to store.")

    def argv(self) -> list[str]:
        return ["can", "blob", "add", self.path]


class W3CanBlobLsArgs(ToolArgs):
    """Lists blobs stored in the current space."""

    json_output: bool = Field(default=True, alias="json", description=JSON_FLAG_DESCRIPTION)
    size: Optional[WholeNumber] = Field(default=None, gt=0, description=SIZE_DESCRIPTION)
    cursor: Optional[str] = Field(default=None, description=CURSOR_DESCRIPTION)

    def argv(self) -> list[str]:
        argv = ["can", "blob", "ls"]
        if self.json_output:
            argv.append("--json")
        return argv + _page_flags(self.size, self.cursor)


class W3CanBlobRmArgs(ToolArgs):
    """Removes a blob from the store by its base58btc encoded multihash."""

    multihash: str = Field(description="Base58btc encoded multihash of the blob to remove.")

    def argv(self) -> list[str]:
        return ["can", "blob", "rm", self.multihash]


class W3CanIndexAddArgs(ToolArgs):
    """Registers an index CID with the service (advanced use). Please refer to storacha.network documentation for details on indices."""

    cid: str = Field(description="CID of the index to add.")

    def argv(self) -> list[str]:
        return ["can", "index", "add", self.cid]


class W3CanUploadAddArgs(ToolArgs):
    """Manually registers an upload DAG by its root CID and shard CIDs (advanced use). This is typically used after storing CAR shards manually."""

    root_cid: str = Field(description="Root data CID of the DAG to register.")
    shard_cids: list[str] = Field(min_length=1, description="One or more shard CIDs where the DAG data is stored.")

    def argv(self) -> list[str]:
        return ["can", "upload", "add", self.root_cid, *self.shard_cids]


class W3CanUploadLsArgs(ToolArgs):
    """Lists uploads registered in the current space (advanced view, shows underlying structure)."""

    json_output: bool = Field(default=True, alias="json", description=JSON_FLAG_DESCRIPTION)
    shards: bool = Field(default=False, description="Pretty print with shards in output (ignored if --json is true).")
    size: Optional[WholeNumber] = Field(default=None, gt=0, description=SIZE_DESCRIPTION)
    cursor: Optional[str] = Field(default=None, description=CURSOR_DESCRIPTION)
    pre: bool = Field(default=False, description="Return the page of results preceding the cursor.")

    def argv(self) -> list[str]:
        argv = ["can", "upload", "ls"]
        if self.json_output:
            argv.append("--json")
        if self.shards:
            argv.append("--shards")
        argv += _page_flags(self.size, self.cursor)
        if self.pre:
            argv.append("--pre")
        return argv


class W3CanUploadRmArgs(ToolArgs):
    """Removes an upload listing by its root CID (advanced use). Does not remove the underlying blobs/shards."""

    root_cid: str = Field(description="Root CID of the upload to remove from the list.")

    def argv(self) -> list[str]:
        return ["can", "upload", "rm", self.root_cid]


class W3PlanGetArgs(ToolArgs):
    """Displays the plan associated with the current or specified account."""

    account_id: Optional[str] = Field(
        default=None,
        description="Optional account ID to get plan for (defaults to current authorized account).",
    )

    def argv(self) -> list[str]:
        argv = ["plan", "get"]
        if self.account_id:
            argv.extend(["--account", self.account_id])
        return argv


class W3AccountLsArgs(ToolArgs):
    """Lists all accounts the current agent is **authorized** for. Use this command after `w3_login` and email validation to confirm the agent is successfully linked to your storacha.network account(s). **Note:** Agent state may be ephemeral (e.g., in Docker). Check authorization status with this command after (re)connecting, and use `w3_login` if needed."""

    def argv(self) -> list[str]:
        return ["account", "ls"]


class W3SpaceProvisionArgs(ToolArgs):
    """Associates a space with a customer/billing account."""

    customer_id: str = Field(
        description="Customer identifier (e.g., email or account DID) to associate the space with.",
    )
    space_did: str = Field(pattern=DID_KEY_PATTERN, description="The DID of the space to provision.")

    def argv(self) -> list[str]:
        return ["space", "provision", self.customer_id, "--space", self.space_did]


class W3CouponCreateArgs(ToolArgs):
    """Attempts to create/claim a coupon using a claim code."""

    claim_code: str = Field(description="The claim code for the coupon.")

    def argv(self) -> list[str]:
        return ["coupon", "create", self.claim_code]


class W3UsageReportArgs(ToolArgs):
    """Displays a storage usage report for the current or specified space."""

    space_did: Optional[str] = Field(
        default=None,
        pattern=DID_KEY_PATTERN,
        description="Optional DID of the space to get usage for (defaults to current space).",
    )
    json_output: bool = Field(default=True, alias="json", description="Format output as JSON (default: true).")

    def argv(self) -> list[str]:
        argv = ["usage", "report"]
        if self.space_did:
            argv.extend(["--space", self.space_did])
        if self.json_output:
            argv.append("--json")
        return argv


class W3CanAccessClaimArgs(ToolArgs):
    """Claims delegated capabilities for the authorized account using a provided proof."""

    proof: str = Field(
        description="Delegation proof (e.g., path to CAR file or base64 CID string) containing capabilities to claim.",
    )

    def argv(self) -> list[str]:
        return ["can", "access", "claim", self.proof]


class W3CanStoreAddArgs(ToolArgs):
    """Stores a CAR file with the service (advanced use). This is often a prerequisite for `w3_can_upload_add`."""

    path: str = Field(description="ABSOLUTE path to the CAR file to store.")

    def argv(self) -> list[str]:
        return ["can", "store", "add", self.path]


class W3CanStoreLsArgs(ToolArgs):
    """Lists stored CAR files (shards) in the current space (advanced use)."""

    json_output: bool = Field(default=True, alias="json", description=JSON_FLAG_DESCRIPTION)
    size: Optional[WholeNumber] = Field(default=None, gt=0, description=SIZE_DESCRIPTION)
    cursor: Optional[str] = Field(default=None, description=CURSOR_DESCRIPTION)

    def argv(self) -> list[str]:
        argv = ["can", "store", "ls"]
        if self.json_output:
            argv.append("--json")
        return argv + _page_flags(self.size, self.cursor)


class W3CanStoreRmArgs(ToolArgs):
    """Removes a stored CAR shard by its CID (advanced use). Use with extreme caution, as this deletes the underlying data shard."""

    car_cid: str = Field(description="CID of the CAR shard to remove from the store.")

    def argv(self) -> list[str]:
        return ["can", "store", "rm", self.car_cid]


class W3CanFilecoinInfoArgs(ToolArgs):
    """Gets Filecoin deal information for a given Piece CID (advanced use)."""

    piece_cid: str = Field(description="The Piece CID to get Filecoin information for.")

    def argv(self) -> list[str]:
        return ["can", "filecoin", "info", self.piece_cid]


class W3ResetArgs(ToolArgs):
    """DANGEROUS: Resets the agent state, removing all proofs and delegations but retaining the agent DID. Requires explicit confirmation argument."""

    confirm_reset: Literal["yes-i-am-sure"] = Field(
        description="Must be exactly 'yes-i-am-sure' to confirm resetting agent state (removes proofs/delegations).",
    )

    def argv(self) -> list[str]:
        return ["reset"]


def iter_tool_args() -> list[type[ToolArgs]]:
    """Argument models in declaration order."""
    return [
        value
        for value in globals().values()
        if isinstance(value, type) and issubclass(value, ToolArgs) and value is not ToolArgs
    ]
