# ---------------------------------- Extra ----------------------------------
SHUFFLE_WALLETS = False  # True/False Shuffle wallets once after loading

# --------------------------------- General ---------------------------------
PROVIDER_MAX_ATTEMPTS = 3  # Attempts to connect to the RPC on transient errors
PROVIDER_RETRY_DELAY = 5  # in seconds, between connection attempts
PROVIDER_OUTAGE_DELAY = 30  # in seconds, before trying the RPC again after an outage

RECEIPT_MAX_ATTEMPTS = 30  # Polls for a transaction receipt
RECEIPT_POLL_INTERVAL = 2  # in seconds

SUBMIT_MAX_ATTEMPTS = 3  # Broadcast attempts, each one with a fresh nonce
SUBMIT_RETRY_DELAY = 2  # in seconds

VERIFY_MAX_ATTEMPTS = 5  # Task verification polls while the API reports pending
VERIFY_RETRY_DELAY = 3  # in seconds

# -------------------------------- Route ---------------------------------
TOTAL_TRANSFER = 30  # Transfers per wallet per cycle
TOTAL_SWAP = 30  # Swaps per wallet per cycle
TOTAL_LP = 30  # Liquidity deposits per wallet per cycle

SHUFFLE_ACTION_GROUPS = True  # Randomize the order of transfer/swap/liquidity groups
DAILY_TASKS = ['check_in', 'faucet']  # Executed in this order before the actions

SLEEP_RANGE_BETWEEN_ACTIONS = (2, 5)  # (min, max) in seconds
CYCLE_COOLDOWN = 24 * 60 * 60  # in seconds, between two full passes

# ------------------------------- Transfer -------------------------------
TRANSFER_AMOUNT = 0.000001  # PHRS sent to a random address
TRANSFER_GAS_LIMIT = 21_000

# --------------------------------- Swap ---------------------------------
SWAP_TOKENS = ['USDC', 'USDT']
SWAP_AMOUNT_RANGE = (0.0001, 0.0009)  # (min, max) PHRS, rounded to 4 decimals
SWAP_POOL_FEE = 3000
SWAP_DEADLINE = 600  # in seconds from now
SWAP_GAS_BUFFER = 1.2

# ------------------------------ Liquidity -------------------------------
LP_TOKENS = ['USDC', 'USDT']
LP_POOL_FEE = 500
LP_TICK_RANGE = (51530, 51550)  # (tickLower, tickUpper)
LP_AMOUNT0_DESIRED = 100_000_000_000  # WPHRS, in wei
LP_AMOUNT1_DESIRED = 8_779_257_879_444  # stablecoin, in token units
LP_VALUE = 0.0000001  # PHRS attached to the multicall
LP_GAS_LIMIT = 500_000
LP_DEADLINE = 1800  # in seconds from now

"""
Daily tasks:
    - check_in                 Daily sign-in on the points API
    - faucet                   Daily PHRS faucet claim
"""
