# Patterns are matched as substrings of the visit's domain, so a listed
# domain also covers its subdomains. Productive is checked first.

PRODUCTIVE_DOMAINS = [
    "github.com",
    "stackoverflow.com",
    "developer.mozilla.org",
    "docs.microsoft.com",
    "learn.microsoft.com",
    "w3schools.com",
    "freecodecamp.org",
    "coursera.org",
    "udemy.com",
    "edx.org",
    "khanacademy.org",
    "arxiv.org",
    "scholar.google.com",
    "medium.com",
    "dev.to",
    "notion.so",
    "trello.com",
    "asana.com",
    "slack.com",
    "teams.microsoft.com",
    "zoom.us",
    "docs.google.com",
    "drive.google.com",
    "dropbox.com",
    "wikipedia.org",
    "pluralsight.com",
    "codecademy.com",
]

DISTRACTING_DOMAINS = [
    "youtube.com",
    "facebook.com",
    "twitter.com",
    "instagram.com",
    "reddit.com",
    "tiktok.com",
    "twitch.tv",
    "netflix.com",
    "hulu.com",
    "disneyplus.com",
    "spotify.com",
    "pinterest.com",
    "tumblr.com",
    "snapchat.com",
    "9gag.com",
    "buzzfeed.com",
    "dailymail.co.uk",
    "tmz.com",
]
