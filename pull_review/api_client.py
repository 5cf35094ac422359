"""GitHub API client for making requests and handling pagination."""

import os
import logging
from typing import Dict, List, Optional
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

API_URL = 'https://api.github.com'
GRAPHQL_URL = f'{API_URL}/graphql'

BLAME_QUERY = """
query($owner: String!, $name: String!, $ref: String!, $path: String!) {
  repository(owner: $owner, name: $name) {
    object(expression: $ref) {
      ... on Commit {
        blame(path: $path) {
          ranges {
            startingLine
            endingLine
            age
            commit {
              author {
                user {
                  login
                }
              }
            }
          }
        }
      }
    }
  }
}
"""


class GitHubAPIError(Exception):
    """Raised when the GitHub GraphQL API reports errors."""


class GitHubAPIClient:
    """Handles GitHub API requests with retry logic and pagination."""

    def __init__(self, token: str = None):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
        """
        # Use provided token or fall back to environment variable
        self.token = token or os.environ.get('GITHUB_TOKEN')
        self.session = requests.Session()

        # One connection per concurrent blame lookup plus a buffer
        adapter = HTTPAdapter(
            pool_connections=20,
            pool_maxsize=20,
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504]
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)
        self.session.headers.update({'Accept': 'application/vnd.github.v3+json'})

        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Blame lookups require authentication.")
            logging.warning("Set GITHUB_TOKEN environment variable or pass token as argument.")

    def _check_response(self, response: requests.Response) -> None:
        if response.status_code == 403:
            logging.error(f"Rate limit exceeded or access denied. Response: {response.text}")
        response.raise_for_status()

    def get_paginated(self, url: str, params: Dict = None) -> List[Dict]:
        """Fetch all pages of a paginated GitHub API endpoint.

        Args:
            url: The API endpoint URL
            params: Query parameters

        Returns:
            List of all items from all pages
        """
        results = []
        page = 1
        per_page = 100

        params = dict(params or {})
        params['per_page'] = per_page

        while True:
            params['page'] = page
            logging.debug(f"Fetching page {page} from {url}")
            response = self.session.get(url, params=params)
            self._check_response(response)
            data = response.json()

            if not data:
                break

            results.extend(data)

            # Check if there are more pages
            if len(data) < per_page:
                break

            page += 1

        logging.debug(f"Fetched {len(results)} total items from {url}")
        return results

    def get(self, url: str, params: Dict = None, headers: Dict = None) -> requests.Response:
        """Make a single GET request to the GitHub API.

        Args:
            url: The API endpoint URL
            params: Query parameters
            headers: Extra request headers

        Returns:
            Response object
        """
        return self.session.get(url, params=params, headers=headers)

    def get_json(self, url: str) -> Dict:
        """GET a single resource and return its decoded JSON body."""
        response = self.get(url)
        self._check_response(response)
        return response.json()

    def post(self, url: str, payload: Dict) -> Dict:
        """POST a JSON payload to the REST API.

        Returns:
            Decoded JSON response body
        """
        response = self.session.post(url, json=payload)
        self._check_response(response)
        return response.json()

    def post_graphql(self, query: str, variables: Dict = None) -> Dict:
        """Make a GraphQL query to the GitHub API.

        Args:
            query: GraphQL query string
            variables: Optional query variables

        Returns:
            JSON response data

        Raises:
            GitHubAPIError: If the GraphQL query reports errors
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        response = self.session.post(GRAPHQL_URL, json=payload)
        self._check_response(response)
        result = response.json()

        # Check for GraphQL errors
        if "errors" in result:
            logging.error(f"GraphQL errors: {result['errors']}")
            raise GitHubAPIError(f"GraphQL query failed: {result['errors']}")

        return result.get("data") or {}

    def get_blame_ranges(self, owner: str, repo: str, ref: str, path: str) -> List[Dict]:
        """Fetch the blame ranges of a file at a given revision.

        Args:
            owner: Repository owner
            repo: Repository name
            ref: Commit SHA or ref expression to blame at
            path: File path within the repository

        Returns:
            Raw blame ranges (empty if the file does not exist at ref)
        """
        data = self.post_graphql(BLAME_QUERY, {
            'owner': owner,
            'name': repo,
            'ref': ref,
            'path': path,
        })
        commit = (data.get('repository') or {}).get('object') or {}
        return (commit.get('blame') or {}).get('ranges') or []
