from enum import Enum


class Action(str, Enum):
    """On-chain message types the classifier knows how to read.

    Modern SDK versions report the message type url as the ``action``
    attribute; chains from before that convention report short legacy names.
    """

    # bank
    MSG_SEND = "/cosmos.bank.v1beta1.MsgSend"
    MSG_MULTI_SEND = "/cosmos.bank.v1beta1.MsgMultiSend"
    # staking
    MSG_DELEGATE = "/cosmos.staking.v1beta1.MsgDelegate"
    MSG_UNDELEGATE = "/cosmos.staking.v1beta1.MsgUndelegate"
    MSG_BEGIN_REDELEGATE = "/cosmos.staking.v1beta1.MsgBeginRedelegate"
    # distribution
    MSG_WITHDRAW_DELEGATOR_REWARD = "/cosmos.distribution.v1beta1.MsgWithdrawDelegatorReward"
    # gov
    MSG_VOTE = "/cosmos.gov.v1beta1.MsgVote"
    MSG_VOTE_V1 = "/cosmos.gov.v1.MsgVote"
    MSG_VOTE_WEIGHTED = "/cosmos.gov.v1beta1.MsgVoteWeighted"
    # authz
    MSG_EXEC = "/cosmos.authz.v1beta1.MsgExec"
    MSG_GRANT = "/cosmos.authz.v1beta1.MsgGrant"
    MSG_REVOKE = "/cosmos.authz.v1beta1.MsgRevoke"
    # ibc
    MSG_TRANSFER = "/ibc.applications.transfer.v1.MsgTransfer"
    MSG_RECV_PACKET = "/ibc.core.channel.v1.MsgRecvPacket"
    MSG_TIMEOUT = "/ibc.core.channel.v1.MsgTimeout"
    MSG_ACKNOWLEDGEMENT = "/ibc.core.channel.v1.MsgAcknowledgement"
    MSG_UPDATE_CLIENT = "/ibc.core.client.v1.MsgUpdateClient"
    # gravity dex
    MSG_SWAP_WITHIN_BATCH = "/tendermint.liquidity.v1beta1.MsgSwapWithinBatch"
    MSG_DEPOSIT_WITHIN_BATCH = "/tendermint.liquidity.v1beta1.MsgDepositWithinBatch"
    MSG_WITHDRAW_WITHIN_BATCH = "/tendermint.liquidity.v1beta1.MsgWithdrawWithinBatch"
    # osmosis
    OSMOSIS_SWAP_EXACT_AMOUNT_IN = "/osmosis.gamm.v1beta1.MsgSwapExactAmountIn"
    OSMOSIS_SWAP_EXACT_AMOUNT_OUT = "/osmosis.gamm.v1beta1.MsgSwapExactAmountOut"
    OSMOSIS_PM_SWAP_EXACT_AMOUNT_IN = "/osmosis.poolmanager.v1beta1.MsgSwapExactAmountIn"
    OSMOSIS_PM_SWAP_EXACT_AMOUNT_OUT = "/osmosis.poolmanager.v1beta1.MsgSwapExactAmountOut"
    OSMOSIS_JOIN_POOL = "/osmosis.gamm.v1beta1.MsgJoinPool"
    OSMOSIS_JOIN_SWAP_EXTERN_AMOUNT_IN = "/osmosis.gamm.v1beta1.MsgJoinSwapExternAmountIn"
    OSMOSIS_EXIT_POOL = "/osmosis.gamm.v1beta1.MsgExitPool"
    OSMOSIS_CL_CREATE_POSITION = "/osmosis.concentratedliquidity.v1beta1.MsgCreatePosition"
    OSMOSIS_CL_WITHDRAW_POSITION = "/osmosis.concentratedliquidity.v1beta1.MsgWithdrawPosition"
    OSMOSIS_LOCK_TOKENS = "/osmosis.lockup.MsgLockTokens"
    # airdrop claims
    STRIDE_CLAIM_FREE_AMOUNT = "/stride.claim.MsgClaimFreeAmount"
    # cosmwasm
    WASM_EXECUTE_CONTRACT = "/cosmwasm.wasm.v1.MsgExecuteContract"

    # legacy action names
    LEGACY_SEND = "send"
    LEGACY_DELEGATE = "delegate"
    LEGACY_BEGIN_UNBONDING = "begin_unbonding"
    LEGACY_BEGIN_REDELEGATE = "begin_redelegate"
    LEGACY_WITHDRAW_DELEGATOR_REWARD = "withdraw_delegator_reward"
    LEGACY_VOTE = "vote"
    LEGACY_SWAP_WITHIN_BATCH = "swap_within_batch"
    LEGACY_DEPOSIT_WITHIN_BATCH = "deposit_within_batch"
    LEGACY_WITHDRAW_WITHIN_BATCH = "withdraw_within_batch"

    @classmethod
    def decode(cls, value: str | None) -> "Action | None":
        """Map a wire type string to its member, None when unknown."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


REWARD_WITHDRAWAL_ACTIONS = frozenset({
    Action.MSG_WITHDRAW_DELEGATOR_REWARD,
    Action.LEGACY_WITHDRAW_DELEGATOR_REWARD,
})

# staking messages that also pay out pending rewards
STAKING_ACTIONS = frozenset({
    Action.MSG_DELEGATE,
    Action.LEGACY_DELEGATE,
    Action.MSG_UNDELEGATE,
    Action.LEGACY_BEGIN_UNBONDING,
    Action.MSG_BEGIN_REDELEGATE,
    Action.LEGACY_BEGIN_REDELEGATE,
})
