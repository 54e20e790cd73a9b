from .interfaces import ChainClientInterface, TopicFilter
from .web3_rpc import Web3RpcClient
