"""Top-level package for the WealthSync Budget Planner.

The primary modules are:

* ``retry`` – fixed-count, constant-delay retry wrapper for async calls
* ``api_client`` – ``httpx`` client for the budgeting API
* ``visualization`` – Plotly chart and pandas table helpers
* ``app`` – the Streamlit page that ties everything together

To run the planner from the command line you can execute:

```bash
streamlit run budget_planner/Home.py
```
"""

from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, invoke, run_with_retry

__all__ = ["DEFAULT_RETRY_POLICY", "RetryPolicy", "invoke", "run_with_retry"]
