"""Portfolio builder: edit a personal portfolio in the browser and publish it to Netlify."""

__version__ = "0.1.0"
